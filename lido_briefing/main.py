"""Command line entry point for the OFP briefing."""
import argparse
import json
import logging
import sys
from typing import List, Optional

from lido_briefing.analyzer import BriefingResult, OfpAnalyzer
from lido_briefing.config import Config

logger = logging.getLogger(__name__)


def setup_logging():
    """Configure logging from environment."""
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-20s | %(filename)-15s | %(funcName)-15s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def read_ofp_text(path: str) -> str:
    """Read OFP text from a file, or from stdin when path is '-'."""
    if path == '-':
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        return f.read()


def format_briefing(result: BriefingResult) -> str:
    """Render a briefing as plain text."""
    lines = []
    route = f"{result.dep_icao or '????'} -> {result.dest_icao or '????'}"
    if result.alt_icaos:
        route += f" (ALTN {', '.join(result.alt_icaos)})"
    lines.append(route)
    lines.append("=" * len(route))

    if result.refs:
        for label, window in [('DEP', result.refs.dep), ('DEST', result.refs.dest)] + \
                [('ALTN', a) for a in (result.refs.altn or ())]:
            lines.append(
                f"{label:<5}{window.icao} ref {window.ref_utc:%d%b %H%MZ} "
                f"window {window.window_start_utc:%H%MZ}-{window.window_end_utc:%H%MZ}"
            )

    for panel, categories in result.buckets().items():
        lines.append("")
        lines.append(f"--- {panel.upper()} NOTAMS ---")
        for category, records in categories.items():
            for record in records:
                preview = record.text.replace('\n', ' ')[:100]
                lines.append(f"[{category.upper():<6}] {record.id_raw} {preview}")

    for block in result.weather:
        lines.append("")
        lines.append(f"--- {block.kind.value} WX {block.icao} {block.name or ''}".rstrip())
        if block.metar:
            lines.append(block.metar)
        if block.taf:
            lines.append(block.taf)
        lines.extend(block.remarks)

    for warning in result.warnings:
        lines.append(f"! {warning}")

    return "\n".join(lines)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='LIDO OFP NOTAM and weather briefing')
    parser.add_argument('ofp', help="Path to extracted OFP text ('-' for stdin)")
    parser.add_argument('--altn', nargs='+', metavar='ICAO',
                        help='Alternate airports (default: first ALTN entry in the OFP)')
    parser.add_argument('--altn-buffer', type=int, metavar='MINUTES',
                        help='Minutes after landing used as alternate reference time')
    parser.add_argument('--json', action='store_true',
                        help='Print the briefing as JSON')
    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    setup_logging()
    args = build_arg_parser().parse_args(argv)

    try:
        Config.validate()
        logger.info(f"LIDO briefing {Config.VERSION}")
        ofp_text = read_ofp_text(args.ofp)
        analyzer = OfpAnalyzer(altn_buffer_minutes=args.altn_buffer)
        result = analyzer.analyze(ofp_text, alt_icaos=args.altn)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to analyze OFP: {e}", exc_info=True)
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_briefing(result))


if __name__ == '__main__':
    main()
