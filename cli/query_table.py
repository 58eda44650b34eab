"""Query-table CLI.

Applies the table data pipeline (filter -> sort -> page) to a JSON file
holding a list of records and prints the resulting page.

Features:
 - Repeatable ``--filter path=value`` and ``--sort [+|-]path`` options.
 - Filter values are decoded as JSON when possible (``age=30`` filters on
   the number 30, ``name=ann`` on the text "ann").
 - ``--strict`` switches the generic matcher from substring to equality.
 - Emits either one JSON row per line plus a summary, or a single JSON
   document (via ``--json``).
 - Exit code 0 on success, 2 on unusable input.

Example:
  tabledata-query players.json --filter team.name=lions --sort=-points --page 2 --json
"""

from __future__ import annotations

import argparse
import json
import math
import sys
from typing import Any, Dict, List, Tuple

from tabledata import DefaultGetData, TableParams
from tabledata.config import settings
from tabledata.params import SORT_ASC, SORT_DESC
from tabledata.services import compile_path, configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Filter, sort and page a JSON list of records")
    p.add_argument("source", help="JSON file containing a list of records ('-' reads stdin)")
    p.add_argument(
        "--filter",
        action="append",
        default=[],
        metavar="PATH=VALUE",
        help="Filter criterion on a dotted field path (repeatable)",
    )
    p.add_argument(
        "--sort",
        action="append",
        default=[],
        metavar="[+|-]PATH",
        help="Sort key, use --sort=-PATH for descending (repeatable, first wins)",
    )
    p.add_argument("--page", type=int, default=settings.DEFAULT_PAGE, help="1-based page number")
    p.add_argument("--count", type=int, default=settings.DEFAULT_COUNT, help="Rows per page")
    p.add_argument("--strict", action="store_true", help="Match filter values by equality")
    p.add_argument("--no-paging", action="store_true", help="Return every matching row")
    p.add_argument("--json", action="store_true", help="Emit one JSON document instead of lines")
    p.add_argument("--verbose", action="store_true", help="Log pipeline details to stderr")
    return p.parse_args(argv)


def _decode_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def parse_filters(items: List[str]) -> Dict[str, Any]:
    criteria: Dict[str, Any] = {}
    for item in items:
        path, sep, raw = item.partition("=")
        if not sep or not path:
            raise ValueError(f"Filter must look like PATH=VALUE, got {item!r}")
        criteria[path.strip()] = _decode_value(raw)
    return criteria


def parse_sorting(items: List[str]) -> Dict[str, str]:
    sorting: Dict[str, str] = {}
    for item in items:
        direction = SORT_DESC if item.startswith("-") else SORT_ASC
        path = item[1:] if item[:1] in ("+", "-") else item
        if not path:
            raise ValueError(f"Sort key needs a field path, got {item!r}")
        compile_path(path)
        sorting.setdefault(path, direction)
    return sorting


def load_rows(source: str) -> List[Any]:
    if source == "-":
        rows = json.load(sys.stdin)
    else:
        with open(source, encoding="utf-8") as f:
            rows = json.load(f)
    if not isinstance(rows, list):
        raise ValueError(f"Expected a JSON list of records, got {type(rows).__name__}")
    return rows


def run_query(rows: List[Any], args: argparse.Namespace) -> Tuple[List[Any], TableParams]:
    params = TableParams(
        page=args.page,
        count=args.count,
        filter_values=parse_filters(args.filter),
        sorting=parse_sorting(args.sort),
    )
    params.settings.data_options.apply_paging = not args.no_paging
    if args.strict:
        params.settings.filter_options.filter_comparator = True
    result = DefaultGetData()(rows, params)
    if args.no_paging:
        params.total = len(result)
    return list(result), params


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        configure_logging("DEBUG")
    try:
        rows = load_rows(args.source)
        page_rows, params = run_query(rows, args)
    except FileNotFoundError:
        print(f"Source file not found: {args.source}", file=sys.stderr)
        return 2
    except ValueError as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return 2

    if args.json:
        payload = {
            "rows": page_rows,
            "total": params.total,
            "page": params.page,
            "count": params.count,
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        for row in page_rows:
            print(json.dumps(row, ensure_ascii=False))
        pages = max(1, math.ceil(params.total / params.count))
        print(f"Page {params.page} of {pages} ({params.total} matching rows)")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
