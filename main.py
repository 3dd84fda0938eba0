# Copyright (c) 2025 Ming Yu (yuming@oppo.com)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import argparse
import json
import os
import sys
import time
from datetime import datetime

from dateutil.parser import isoparse

from reserve_time import ParseError, TimeParser
from reserve_time.core.logger import get_logger, setup_logging, SIMPLE_FORMAT
from reserve_time.core.utils import get_timezone


def resolve(time_parser, mode, now, query):
    """Return (start, end) for range mode, (None, end) for duration mode."""
    if mode == "duration":
        return None, time_parser.parse_duration(now, query)
    return time_parser.parse_range(now, query)


def report_error(time_parser, query, error, writer=print):
    """打印错误信息，并标出出错的词"""
    writer(f"parsetime: {error}")
    marked = time_parser.format_error(query, error)
    if marked:
        writer(marked)


def expected_time(value, time_parser):
    if value is None:
        return None
    return isoparse(value).astimezone(time_parser.tzinfo)


def run_case(time_parser, data, default_mode):
    """
    Run one benchmark case.

    Returns:
        tuple: (match, description of the outcome)
    """
    query = data["query"]
    mode = data.get("mode", default_mode)
    try:
        now = isoparse(data["base_time"]) if "base_time" in data else datetime.now()
    except ValueError as e:
        return False, f"invalid base_time: {e}"

    try:
        start, end = resolve(time_parser, mode, now, query)
    except ParseError as e:
        expected_error = data.get("error")
        return expected_error == str(e), f"error: {e}"

    if "error" in data:
        return False, f"start={start} end={end}"

    match = True
    exp_start = expected_time(data.get("start"), time_parser)
    exp_end = expected_time(data.get("end"), time_parser)
    if exp_start is not None and exp_start != start:
        match = False
    if exp_end is not None and exp_end != end:
        match = False
    return match, f"start={start} end={end}"


def benchmark(time_parser, input_file, default_mode="range", show_all_cases=False, writer=print):
    total_cases = 0
    success_cases = 0
    error_cases = 0

    with open(input_file, encoding="utf-8") as fin:
        for line_num, line in enumerate(fin, 1):
            line = line.strip()
            if not line:
                continue
            total_cases += 1
            data = json.loads(line)

            _wall_start = time.time()
            match, outcome = run_case(time_parser, data, default_mode)
            _wall_cost = time.time() - _wall_start

            if match:
                success_cases += 1
                if show_all_cases:
                    writer(f"Line {line_num}: ✓ Success | total={_wall_cost:.6f}s")
                    writer(f"  Query: {data['query']}")
                    writer(f"  Result: {outcome}")
            else:
                error_cases += 1
                writer(f"Line {line_num}: ✗ Mismatch | total={_wall_cost:.6f}s")
                writer(f"  Query: {data['query']}")
                writer(f"  Calculated: {outcome}")
                writer(
                    "  Expected: "
                    + json.dumps({k: data[k] for k in ("start", "end", "error") if k in data})
                )

    writer("\n" + "=" * 80)
    writer("BENCHMARK SUMMARY")
    writer("=" * 80)
    writer(f"Total test cases: {total_cases}")
    if total_cases:
        writer(f"Success cases: {success_cases} ({success_cases/total_cases*100:.2f}%)")
        writer(f"Error cases: {error_cases} ({error_cases/total_cases*100:.2f}%)")
    return error_cases


def build_arg_parser():
    parser = argparse.ArgumentParser(
        description="Resolve reservation time phrases into absolute start/end times",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # start and end of a reservation
  python main.py --text "noon tomorrow + 5 hours"

  # new end time for an existing reservation
  python main.py --text "+2 hours" --mode duration --base_time 2017-04-01T17:00:00-04:00

  # batch check a jsonl file of {"query", "base_time", "start", "end" | "error"}
  python main.py --file cases.jsonl --timezone America/New_York
        """,
    )
    parser.add_argument("--text", help="Time phrase to resolve")
    parser.add_argument("--file", help="Path to a jsonl file for batch checking")
    parser.add_argument("--output", help="Path to a file that receives the --file report")
    parser.add_argument(
        "--mode",
        choices=["range", "duration"],
        default="range",
        help="range: start and end; duration: end time relative to --base_time",
    )
    parser.add_argument(
        "--base_time",
        type=str,
        default=None,
        help="Reference time (ISO 8601), defaults to now",
    )
    parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help="IANA zone for results, defaults to RESERVE_TIME_TZ or the local zone",
    )
    parser.add_argument("--show_all", action="store_true", help="Also list matching cases")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        setup_logging(level="DEBUG", format_string=SIMPLE_FORMAT)
    logger = get_logger(__name__)

    if not args.text and not args.file:
        print("error: one of --text or --file is required\n", file=sys.stderr)
        parser.print_help()
        return 1

    if args.text and args.file:
        print("error: --text and --file cannot be used together\n", file=sys.stderr)
        parser.print_help()
        return 1

    if args.output and not args.file:
        print("error: --output requires --file\n", file=sys.stderr)
        return 1

    if args.file and not os.path.exists(args.file):
        print(f"error: file not found: {args.file}", file=sys.stderr)
        return 1

    try:
        time_parser = TimeParser(get_timezone(args.timezone))
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.text:
        try:
            now = isoparse(args.base_time) if args.base_time else datetime.now()
        except ValueError as e:
            print(f"error: invalid --base_time: {e}", file=sys.stderr)
            return 1

        try:
            start, end = resolve(time_parser, args.mode, now, args.text)
        except ParseError as e:
            logger.debug(f"parse failed: {e!r}")
            report_error(time_parser, args.text, e, writer=lambda msg: print(msg, file=sys.stderr))
            return 1

        if start is not None:
            print(start, end)
        else:
            print(end)
        return 0

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:

            def writer(msg):
                try:
                    print(msg)
                except BrokenPipeError:
                    # 忽略管道中断错误（如使用 head 命令时）
                    pass
                f.write(msg + "\n")

            errors = benchmark(time_parser, args.file, args.mode, args.show_all, writer=writer)
    else:
        errors = benchmark(time_parser, args.file, args.mode, args.show_all)

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
