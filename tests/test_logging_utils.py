import csv
import json

import pytest

from doclinks_core.interfaces import Deleted, Replaced, Unchanged
from doclinks_pipeline.logging_utils import REPORT_FIELDS, ChangeReport, CSVLogger, JSONLLogger


def test_csv_writes_header_once(tmp_path):
    csv_path = tmp_path / "changes.csv"
    fieldnames = ["path", "position"]

    logger1 = CSVLogger(csv_path, fieldnames=fieldnames)
    logger1.write_row({"path": "a.rs", "position": 1})
    logger1.close()

    logger2 = CSVLogger(csv_path, fieldnames=fieldnames)
    logger2.write_row({"path": "b.rs", "position": 2})
    logger2.close()

    with csv_path.open(newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        header = next(reader)
        rows = list(reader)

    assert header == fieldnames
    assert rows == [["a.rs", "1"], ["b.rs", "2"]]


def test_csv_rejects_extra_keys(tmp_path):
    logger = CSVLogger(tmp_path / "extra.csv", fieldnames=["path"])
    logger.write_row({"path": "a.rs"})
    with pytest.raises(ValueError):
        logger.write_row({"path": "b.rs", "extra": True})
    logger.close()


def test_csv_requires_fieldnames(tmp_path):
    with pytest.raises(ValueError):
        CSVLogger(tmp_path / "x.csv", fieldnames=[])


def test_jsonl_appends_lines(tmp_path):
    jsonl_path = tmp_path / "events.jsonl"
    with JSONLLogger(jsonl_path) as logger:
        logger.log({"b": "\u00e9", "a": 1})
    with JSONLLogger(jsonl_path) as logger:
        logger.log({"a": 2})

    lines = jsonl_path.read_text(encoding="utf-8").splitlines()
    # Keys sorted, non-ASCII kept as is, second logger appends
    assert lines == ['{"a": 1, "b": "\u00e9"}', '{"a": 2}']


ACTIONS = [
    Unchanged("fn a() {}"),
    Deleted("///", "Consecutive empty comment lines", 2),
    Replaced("/// [Foo]: std/struct.Foo.html", "/// [Foo]: std::Foo", 3),
]


def test_change_report_jsonl(tmp_path):
    path = tmp_path / "nested" / "report.jsonl"
    with ChangeReport(path) as report:
        assert report.log_actions("src/lib.rs", ACTIONS) == 2
        report.log_error("src/bad.rs", "read", "boom")

    recs = [json.loads(l) for l in path.read_text(encoding="utf-8").splitlines()]
    assert [r["kind"] for r in recs] == ["deleted", "replaced", "error:read"]
    assert recs[0] == {
        "path": "src/lib.rs",
        "kind": "deleted",
        "position": 2,
        "reason": "Consecutive empty comment lines",
        "text": "///",
    }
    assert recs[1]["new_text"] == "/// [Foo]: std::Foo"


def test_change_report_csv(tmp_path):
    path = tmp_path / "report.csv"
    with ChangeReport(path) as report:
        report.log_actions("src/lib.rs", ACTIONS)

    with path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert list(rows[0].keys()) == REPORT_FIELDS
    assert rows[0]["kind"] == "deleted" and rows[0]["new_text"] == ""
    assert rows[1]["kind"] == "replaced" and rows[1]["position"] == "3"


def test_change_report_csv_records_failed_files(tmp_path):
    path = tmp_path / "report.csv"
    with ChangeReport(path) as report:
        report.log_actions("src/lib.rs", ACTIONS)
    # Reopening appends without repeating the header
    with ChangeReport(path) as report:
        report.log_error("src/bad.rs", "open_for_read", "Failed to open file 'src/bad.rs' for read: gone")

    with path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["kind"] for r in rows] == ["deleted", "replaced", "error:open_for_read"]
    err = rows[2]
    assert err["path"] == "src/bad.rs"
    assert err["reason"].startswith("Failed to open file")
    assert err["position"] == "" and err["text"] == "" and err["new_text"] == ""
