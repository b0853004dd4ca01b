"""
bucketsync - Main CLI interface
One-way directory to object-storage synchronization

Every option can also come from a JSON config file or from the
``INPUT_*`` environment variables set by CI action runners; flags
given on the command line take precedence.
"""
import argparse
import sys

from colorama import init

from . import __version__

# Initialize colorama
init(autoreset=True)

# ── Help-text epilogs for subcommands ──────────────────────────────────────

SYNC_EXAMPLES = """\
Examples:
  bucketsync sync --local-path ./public --bucket my-site --endpoint oss-cn-hangzhou.aliyuncs.com
  bucketsync sync --config-file deploy.json --remote-path releases/v2/
  bucketsync sync --include-regex '\\.(html|css|js)$' --exclude-regex '^drafts/'
  bucketsync sync --delay-html-file-upload --no-delete-remote-files
  bucketsync sync --headers '{"Cache-Control": "max-age=600"}'

Credentials are best passed via the config file or INPUT_ACCESS-KEY-ID /
INPUT_ACCESS-KEY-SECRET rather than on the command line.
"""

PLAN_EXAMPLES = """\
Examples:
  bucketsync plan
  bucketsync plan --config-file deploy.json --json
  bucketsync plan --no-incremental

Lists the files a sync would upload and delete without transferring anything.
"""


# ── Argument Parser ────────────────────────────────────────────────────────

def _add_sync_options(parser):
    """Options shared by every subcommand that talks to a bucket."""
    conn = parser.add_argument_group('connection')
    conn.add_argument('--access-key-id', help='Access key id')
    conn.add_argument('--access-key-secret', help='Access key secret')
    conn.add_argument('--security-token', help='Temporary session token (optional)')
    conn.add_argument('--bucket', help='Bucket name')
    conn.add_argument('--endpoint', help='Service endpoint, e.g. oss-cn-hangzhou.aliyuncs.com')
    conn.add_argument('--region', help='Signing region (optional)')

    sync = parser.add_argument_group('sync')
    sync.add_argument('--local-path', help='Local directory to sync from')
    sync.add_argument('--remote-path', help='Bucket prefix to sync under (default: bucket root)')
    sync.add_argument('--include-regex', help='Only sync files whose relative path matches')
    sync.add_argument('--exclude-regex', help='Skip files whose relative path matches')
    sync.add_argument('--headers', help='JSON object of upload headers, or a header rule object')
    sync.add_argument('--delay-html-file-upload', action='store_true', default=None,
                      help='Upload .html files after every other file')
    sync.add_argument('--no-delete-remote-files', action='store_true', default=None,
                      help='Keep remote files that no longer exist locally')
    sync.add_argument('--incremental', action=argparse.BooleanOptionalAction, default=None,
                      help='Upload only new or changed files (default: on)')
    sync.add_argument('--retry', help='Attempts per remote operation (default: 5)')
    sync.add_argument('--max-concurrency', type=int, help='Maximum transfers in flight (default: 16)')


def create_argument_parser():
    """Create and configure the subparser-based argument parser."""
    parser = argparse.ArgumentParser(
        prog='bucketsync',
        description='bucketsync: sync a local directory into an object-storage bucket',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    # Shared parent so global flags work after the subcommand name too
    _global_parent = argparse.ArgumentParser(add_help=False)
    _global_parent.add_argument('--verbose', action='store_true', default=None, help='Enable verbose output')
    _global_parent.add_argument('--quiet', action='store_true', default=None, help='Only show warnings and errors')
    _global_parent.add_argument('--config-file', help='JSON config file (default: ./bucketsync.json if present)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ── sync ───────────────────────────────────────────────────────────
    sync_parser = subparsers.add_parser(
        'sync',
        parents=[_global_parent],
        help='Upload new and changed files, delete remote leftovers',
        epilog=SYNC_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_sync_options(sync_parser)

    # ── plan ───────────────────────────────────────────────────────────
    plan_parser = subparsers.add_parser(
        'plan',
        parents=[_global_parent],
        help='Show what sync would do without transferring anything',
        epilog=PLAN_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_sync_options(plan_parser)
    plan_parser.add_argument('--json', action='store_true', help='Print the plan as JSON')

    return parser


def main(argv=None):
    """Main CLI entry point."""
    from .utils.logger import setup_logging

    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=bool(getattr(args, 'verbose', False)), quiet=bool(getattr(args, 'quiet', False)))

    if args.command is None:
        parser.print_help()
        return 1

    from .modes.plan_handler import PlanHandler
    from .modes.sync_handler import SyncHandler

    handlers = {
        'sync': lambda: SyncHandler(args),
        'plan': lambda: PlanHandler(args),
    }

    handler_factory = handlers.get(args.command)
    if not handler_factory:
        parser.print_help()
        return 1

    return handler_factory().execute()


if __name__ == '__main__':
    sys.exit(main())
