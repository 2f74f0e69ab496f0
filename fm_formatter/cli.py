"""
FM Formatter CLI — 셋업 JSON → 리포트 텍스트
==============================================
    fm-format setup.json -t discord -u Imperial
    cat setup.json | fm-format - -o tune.md
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from fm_formatter import config
from fm_formatter.formatter import available_targets, generate_report
from fm_formatter.models import setup_from_dict

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="fm-format",
        description="Forza Motorsport setup formatter (reddit markdown / discord text)",
    )
    parser.add_argument(
        "setup",
        help="셋업 JSON 경로 ('-' = stdin)",
    )
    parser.add_argument(
        "-t", "--target", default=config.DEFAULT_TARGET,
        help=f"출력 대상: {', '.join(available_targets())} (default: {config.DEFAULT_TARGET})",
    )
    parser.add_argument(
        "-u", "--units", default=config.DEFAULT_UNITS,
        help=f"스탯 단위계: Metric | Imperial (default: {config.DEFAULT_UNITS})",
    )
    parser.add_argument(
        "-l", "--link", default=config.DEFAULT_SHARE_LINK,
        help="공유 링크 URL",
    )
    parser.add_argument(
        "-o", "--output", default=None,
        help="출력 파일 경로 (미지정=stdout)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="DEBUG 로그 출력",
    )
    return parser.parse_args(argv)


def load_setup_json(source: str) -> dict:
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).read_text(encoding="utf-8")
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("setup JSON must be an object")
    return data


def run(args) -> str:
    data = load_setup_json(args.setup)
    setup = setup_from_dict(data)
    report = generate_report(setup, args.target, args.units, args.link)

    if args.output:
        Path(args.output).write_text(report, encoding="utf-8")
        logger.info("Report written to %s", args.output)
    else:
        sys.stdout.buffer.write(report.encode("utf-8"))
        sys.stdout.buffer.write(b"\n")
        sys.stdout.flush()
    return report


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
    )

    try:
        run(args)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
