"""Command line entry point: convert a calendar document to JSON."""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from requests.exceptions import RequestException

from calendar_parser.errors import ParseError
from calendar_parser.grammar import CalendarParser
from lambda_function import setup_logging
from processor.pipeline import CalendarPipeline
from processor.serialization import events_to_json
from reader.calendar_document import CalendarDocumentReader

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='calendar-events',
        description='Convert a markdown calendar into a JSON array of events.'
    )
    parser.add_argument(
        'source', nargs='?', default='README.md',
        help='calendar document path or URL (default: README.md)'
    )
    parser.add_argument(
        '-o', '--output',
        help='write JSON to this file instead of standard output'
    )
    parser.add_argument('--timeout', type=int, default=30, help='HTTP timeout in seconds')
    parser.add_argument('--log-level', default='WARNING', help='logging level (default: WARNING)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        raw_text = CalendarDocumentReader(timeout=args.timeout).read(args.source)
    except (OSError, RequestException) as e:
        print(f"Failed to read calendar document {args.source}: {e}", file=sys.stderr)
        return 1

    pipeline = CalendarPipeline(parser=CalendarParser())

    try:
        events = pipeline.run(raw_text)
    except ParseError as e:
        print(e.message, file=sys.stderr)
        return 1

    output = events_to_json(events)
    if args.output:
        Path(args.output).write_text(output + '\n', encoding='utf-8')
        logger.info(f"Wrote {len(events)} events to {args.output}")
    else:
        print(output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
