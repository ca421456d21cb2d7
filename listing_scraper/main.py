"""
Command-line entry point for the directory-listing scraper.
"""

import argparse
import asyncio
import signal
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from listing_scraper.config import CrawlConfig, CrawlOptions, MODE_MOVIES, VALID_MODES
from listing_scraper.crawl_controller import CrawlController
from listing_scraper.exporter import export_filename
from listing_scraper.logging_config import setup_logging


# Global controller for signal handling
_controller: Optional[CrawlController] = None


def signal_handler(signum, frame):
    """Handle SIGINT/SIGTERM for graceful shutdown."""
    print("\n\n" + "=" * 60)
    print("STOP SIGNAL RECEIVED - FINISHING CURRENT STEP")
    print("=" * 60)
    if _controller:
        _controller.stop()
    else:
        sys.exit(0)


def print_summary(status: dict):
    """Print the end-of-run banner."""
    progress = status['progress']
    print("\n" + "=" * 60)
    print("CRAWL STOPPED" if status['stopped'] else "CRAWL FINISHED")
    print("=" * 60)
    print(f"Mode:        {status['mode']}")
    print(f"Root:        {status['root_url']}")
    print(f"State:       {status['state']}")
    print(f"Files:       {progress['processed']}")
    print(f"Records:     {status['results_count']}")
    print(f"Failures:    {status['failures_count']}")
    print(f"Requests:    {status['requests_made']}")

    if status['error_message']:
        print(f"Error:       {status['error_message']}")

    if status['failures']:
        print(f"\nFailed files ({len(status['failures'])}):")
        for f in status['failures'][:10]:
            print(f"  - {f['url']}: {f['error'][:50]}")
        if len(status['failures']) > 10:
            print(f"  ... and {len(status['failures']) - 10} more")

    if status['fetch_errors']:
        print(f"\nUnreachable listings: {len(status['fetch_errors'])}")


def run_crawl(args) -> int:
    """Run one crawl with CrawlController and export the results."""
    global _controller

    config = CrawlConfig(
        delay_ms=args.delay,
        timeout=args.timeout,
        max_depth=args.max_depth,
    )
    options = CrawlOptions(
        root_url=args.url,
        mode=args.mode,
        delay_ms=args.delay,
        max_depth=args.max_depth,
    )

    _controller = CrawlController(config)

    signal.signal(signal.SIGINT, signal_handler)
    # SIGTERM is not reliably available on Windows
    if hasattr(signal, 'SIGTERM') and sys.platform != 'win32':
        signal.signal(signal.SIGTERM, signal_handler)

    result = asyncio.run(_controller.run(options))
    if not result.accepted:
        print(f"✗ Crawl rejected: {result.reason}")
        return 2

    status = _controller.get_status()
    print_summary(status)

    data = _controller.export_to_table()
    if data is not None:
        output = Path(args.output or export_filename(status['mode']))
        output.write_bytes(data)
        print(f"\n✓ Exported to {output}")
    else:
        print("\nNothing to export")

    return 0 if status['state'] == 'complete' else 1


def main(argv=None):
    load_dotenv()

    parser = argparse.ArgumentParser(
        description='Directory-listing media scraper',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Crawl a movie archive
  listing-scraper --url http://server/Data/movies/Hollywood/

  # Crawl a TV archive, faster pacing, custom output
  listing-scraper --url http://server/Data/TV/ --mode series --delay 250 --output tv.xlsx
"""
    )
    parser.add_argument('--url', required=True, help='Root listing URL')
    parser.add_argument(
        '--mode',
        type=str,
        default=MODE_MOVIES,
        choices=list(VALID_MODES),
        help='What the archive holds (default: movies)'
    )
    parser.add_argument(
        '--delay',
        type=int,
        default=1000,
        help='Delay between requests in milliseconds (default: 1000)'
    )
    parser.add_argument(
        '--timeout',
        type=float,
        default=15.0,
        help='Request timeout in seconds (default: 15)'
    )
    parser.add_argument(
        '--max-depth',
        type=int,
        default=10,
        help='Maximum directory depth below the root (default: 10)'
    )
    parser.add_argument('--output', type=str, help='Path of the .xlsx export')
    parser.add_argument('--log-level', type=str, default='INFO', help='Logging level (default: INFO)')
    parser.add_argument('--log-file', type=str, help='Also write logs to this file')

    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    return run_crawl(args)


if __name__ == '__main__':
    sys.exit(main())
