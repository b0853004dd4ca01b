"""
Tests for the inventory diff.
"""

from bucketsync.models import ActionList, Inventory
from bucketsync.services.reconciler import reconcile


LOCAL = Inventory({"a": "h1", "b": "h2"})
REMOTE = Inventory({"b": "h2", "c": "h3"})


def test_incremental_uploads_only_new_and_changed():
    actions = reconcile(LOCAL, REMOTE, incremental=True)
    assert actions.upload == ("a",)
    assert actions.delete == ("c",)


def test_full_mode_uploads_every_local_key():
    actions = reconcile(LOCAL, REMOTE, incremental=False)
    assert actions.upload == ("a", "b")
    assert actions.delete == ("c",)


def test_changed_fingerprint_is_uploaded():
    actions = reconcile(Inventory({"a": "new"}), Inventory({"a": "old"}), incremental=True)
    assert actions == ActionList(["a"], [])


def test_order_follows_source_inventories():
    local = Inventory([("z", "1"), ("m", "2"), ("a", "3")])
    remote = Inventory([("y", "9"), ("b", "8")])
    actions = reconcile(local, remote, incremental=True)
    assert actions.upload == ("z", "m", "a")
    assert actions.delete == ("y", "b")


def test_second_run_without_changes_is_empty():
    first = reconcile(LOCAL, REMOTE, incremental=True)

    # Apply the first run's actions to the remote snapshot
    mirrored = {k: v for k, v in REMOTE.items() if k not in first.delete}
    mirrored.update({k: LOCAL[k] for k in first.upload})

    second = reconcile(LOCAL, Inventory(mirrored), incremental=True)
    assert second.is_empty()


def test_empty_inventories():
    assert reconcile(Inventory(), Inventory()).is_empty()
