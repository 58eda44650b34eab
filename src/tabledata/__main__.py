"""Module entrypoint for `python -m tabledata`.

Delegates to `cli.query_table.main`.
"""

from __future__ import annotations

from cli import query_table as _query_table


def main() -> int:  # pragma: no cover - runtime delegation
    return _query_table.main()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
