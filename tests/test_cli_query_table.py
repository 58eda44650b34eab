"""Tests for the query-table CLI."""

from __future__ import annotations

import json
from pathlib import Path

from cli import query_table


def _write_rows(tmp_path: Path, rows) -> Path:
    path = tmp_path / "rows.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


def test_json_output(tmp_path, capsys, people):
    source = _write_rows(tmp_path, people)
    code = query_table.main(
        [str(source), "--filter", "team.city=leipzig", "--sort=-age", "--count", "1", "--page", "2", "--json"]
    )
    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert [r["id"] for r in payload["rows"]] == [3]
    assert payload["total"] == 2
    assert (payload["page"], payload["count"]) == (2, 1)


def test_text_output_and_strict_numbers(tmp_path, capsys, people):
    source = _write_rows(tmp_path, people)
    code = query_table.main([str(source), "--filter", "age=29", "--strict", "--sort", "name"])
    lines = capsys.readouterr().out.strip().splitlines()
    assert code == 0
    assert [json.loads(line)["id"] for line in lines[:-1]] == [2, 4]
    assert lines[-1] == "Page 1 of 1 (2 matching rows)"


def test_no_paging(tmp_path, capsys, people):
    source = _write_rows(tmp_path, people)
    code = query_table.main([str(source), "--count", "2", "--no-paging", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert len(payload["rows"]) == 5
    assert payload["total"] == 5


def test_missing_file(tmp_path, capsys):
    assert query_table.main([str(tmp_path / "nope.json")]) == 2
    assert "not found" in capsys.readouterr().err


def test_rejects_non_list_json(tmp_path, capsys):
    source = tmp_path / "obj.json"
    source.write_text('{"a": 1}', encoding="utf-8")
    assert query_table.main([str(source)]) == 2
    assert "Expected a JSON list" in capsys.readouterr().err


def test_rejects_bad_sort_path(tmp_path, capsys, people):
    source = _write_rows(tmp_path, people)
    assert query_table.main([str(source), "--sort", "a..b"]) == 2
    assert "Invalid sort path" in capsys.readouterr().err


def test_parse_filters_decodes_json_values():
    assert query_table.parse_filters(["a=1", "b=text", "c.d=true"]) == {"a": 1, "b": "text", "c.d": True}


def test_parse_sorting_keeps_first_direction():
    assert query_table.parse_sorting(["-points", "+name", "points"]) == {"points": "desc", "name": "asc"}
