#!/usr/bin/env python3
"""
Command-line front end for the MCPEDL client.

Prints the requested record as JSON on stdout.

Usage:
    python3 scripts/mcpedl_cli.py search "furniture" --page 2
    python3 scripts/mcpedl_cli.py detail some-addon-name
    python3 scripts/mcpedl_cli.py download 12345
    python3 scripts/mcpedl_cli.py latest --page 1

Exit codes:
    0: Success
    1: The request failed (error JSON is printed on stderr)
"""

import os
import sys
import json
import argparse
import logging

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from mcpedl.client import create_client_from_config
from mcpedl.errors import McpedlError
from utils.logging_config import setup_logging

# Import configuration (with fallback)
try:
    from config import LOG_LEVEL, LOG_FILE
except ImportError:
    LOG_LEVEL = 'WARNING'
    LOG_FILE = None

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Unofficial mcpedl.org client')

    parser.add_argument('--base-url', type=str, default=None,
                        help='Override the site base URL (default from config.py)')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Request timeout in seconds')
    parser.add_argument('--max-retries', type=int, default=None,
                        help='Retries after the first attempt for transient failures')
    parser.add_argument('--log-level', type=str, default=None,
                        help=f'Log level (default: {LOG_LEVEL})')
    parser.add_argument('--indent', type=int, default=2,
                        help='JSON indentation (default: 2)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    search = subparsers.add_parser('search', help='Search posts')
    search.add_argument('query', type=str, help='Search text')
    search.add_argument('--page', type=int, default=1, help='Result page (default: 1)')

    detail = subparsers.add_parser('detail', help='Show full post detail')
    detail.add_argument('post_id', type=str, help='Post slug, e.g. "furniture-addon"')

    download = subparsers.add_parser('download', help='Resolve a file id to its URL')
    download.add_argument('file_id', type=int, help='Numeric file id from the download table')

    latest = subparsers.add_parser('latest', help='List the latest uploads')
    latest.add_argument('--page', type=int, default=1, help='Listing page (default: 1)')

    return parser.parse_args(argv)


def run_command(client, args):
    """Dispatch *args.command* and return the resulting record."""
    if args.command == 'search':
        return client.search(args.query, args.page)
    if args.command == 'detail':
        return client.detail(args.post_id)
    if args.command == 'download':
        return client.download(args.file_id)
    if args.command == 'latest':
        return client.latest(args.page)
    raise ValueError(f'Unknown command: {args.command}')


def main(argv=None):
    args = parse_arguments(argv)
    setup_logging(LOG_FILE, args.log_level or LOG_LEVEL)

    try:
        client = create_client_from_config(
            base_url=args.base_url,
            timeout=args.timeout,
            max_retries=args.max_retries,
        )
        with client:
            result = run_command(client, args)
    except McpedlError as e:
        logger.error(f"{args.command} failed: [{e.code}] {e}")
        print(json.dumps(e.to_dict(), ensure_ascii=False), file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=args.indent))
    return 0


if __name__ == '__main__':
    sys.exit(main())
