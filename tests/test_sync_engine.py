"""
End-to-end tests of a sync run against an in-memory bucket.
"""

import hashlib

import pytest

from bucketsync.exceptions import ConfigurationError
from bucketsync.services.sync_engine import SyncService, run_sync


@pytest.mark.asyncio
async def test_first_run_uploads_everything_under_prefix(make_config, fake_storage, fast_retry):
    service = SyncService(make_config(remote_path="/site"), storage=fake_storage, retry_policy=fast_retry)

    report = await service.run()

    assert service.remote_prefix == "site/"
    assert report.uploaded == 5
    assert report.deleted == 0
    assert fake_storage.objects["site/about/index.html"] == b"<html>about</html>"


@pytest.mark.asyncio
async def test_second_run_is_a_no_op(make_config, fake_storage, fast_retry):
    config = make_config(remote_path="site")
    await SyncService(config, storage=fake_storage, retry_policy=fast_retry).run()
    fake_storage.calls.clear()

    report = await SyncService(config, storage=fake_storage, retry_policy=fast_retry).run()

    assert (report.uploaded, report.deleted) == (0, 0)
    assert fake_storage.calls_of("put") == []
    assert fake_storage.calls_of("delete") == []


@pytest.mark.asyncio
async def test_changed_and_removed_files(make_config, fake_storage, fast_retry, site_dir):
    config = make_config()
    await SyncService(config, storage=fake_storage, retry_policy=fast_retry).run()

    (site_dir / "assets" / "app.js").write_bytes(b"console.log(2);")
    (site_dir / "tmp" / "draft.txt").unlink()
    fake_storage.calls.clear()

    report = await SyncService(config, storage=fake_storage, retry_policy=fast_retry).run()

    assert fake_storage.calls_of("put") == ["assets/app.js"]
    assert fake_storage.calls_of("delete") == ["tmp/draft.txt"]
    assert report.remote_files == 5
    assert report.local_files == 4


@pytest.mark.asyncio
async def test_objects_outside_prefix_are_untouched(make_config, make_storage, fast_retry):
    storage = make_storage({"other/keep.txt": b"keep", "site/stale.txt": b"stale"})

    await SyncService(make_config(remote_path="site/"), storage=storage, retry_policy=fast_retry).run()

    assert "other/keep.txt" in storage.objects
    assert "site/stale.txt" not in storage.objects


@pytest.mark.asyncio
async def test_excluded_files_are_deleted_remotely(make_config, make_storage, fast_retry):
    storage = make_storage({"tmp/draft.txt": b"draft"})
    config = make_config(exclude_regex=r"^tmp/")

    report = await SyncService(config, storage=storage, retry_policy=fast_retry).run()

    assert report.deleted == 1
    assert "tmp/draft.txt" not in storage.objects


@pytest.mark.asyncio
async def test_full_mode_reuploads_unchanged_files(make_config, fake_storage, fast_retry):
    await SyncService(make_config(), storage=fake_storage, retry_policy=fast_retry).run()
    fake_storage.calls.clear()

    report = await SyncService(make_config(incremental=False), storage=fake_storage, retry_policy=fast_retry).run()

    assert report.uploaded == 5
    assert len(fake_storage.calls_of("put")) == 5


@pytest.mark.asyncio
async def test_remote_etag_matches_local_md5(make_config, fake_storage, fast_retry, site_dir):
    service = SyncService(make_config(), storage=fake_storage, retry_policy=fast_retry)
    await service.run()

    _, local, remote = await service.plan()

    assert local == remote
    assert local["index.html"] == hashlib.md5((site_dir / "index.html").read_bytes()).hexdigest()


@pytest.mark.asyncio
async def test_dry_run_transfers_nothing(make_config, fake_storage, fast_retry):
    report = await SyncService(make_config(), storage=fake_storage, retry_policy=fast_retry).run(dry_run=True)

    assert report.dry_run
    assert report.local_files == 5
    assert fake_storage.objects == {}


@pytest.mark.asyncio
async def test_no_delete_option(make_config, make_storage, fast_retry):
    storage = make_storage({"stale.txt": b"stale"})
    config = make_config(no_delete_remote_files=True)

    report = await SyncService(config, storage=storage, retry_policy=fast_retry).run()

    assert report.delete_skipped
    assert "stale.txt" in storage.objects


@pytest.mark.asyncio
async def test_configured_headers_reach_the_transport(make_config, fake_storage, fast_retry):
    config = make_config(headers='{"Cache-Control": "max-age=60"}')

    await SyncService(config, storage=fake_storage, retry_policy=fast_retry).run()

    assert fake_storage.headers["assets/app.js"] == {"Cache-Control": "max-age=60"}


def test_invalid_headers_fail_before_any_request(make_config, fake_storage):
    with pytest.raises(ConfigurationError):
        SyncService(make_config(headers="{'Cache-Control': 'no-cache'}"), storage=fake_storage)
    assert fake_storage.calls == []


def test_invalid_regex_fails_before_any_request(make_config, fake_storage):
    with pytest.raises(ConfigurationError):
        SyncService(make_config(include_regex="(unclosed"), storage=fake_storage)
    assert fake_storage.calls == []


def test_run_sync_blocking_entry_point(make_config, fake_storage):
    report = run_sync(make_config(), storage=fake_storage)

    assert report.uploaded == 5
    assert report.to_dict()["uploaded"] == 5
