import logging

import pandas as pd
import pytest

from mongomigrate.core.summary import CommandRecord, RunSummary, report, write_report
from mongomigrate.options import Action


def make_summary(action=Action.EXPORT, processed=1, failed=1) -> RunSummary:
    ok = [CommandRecord(f"ok{i}", f"mongoexport -u bob -p s3cret -c ok{i}", True) for i in range(processed)]
    bad = [CommandRecord(f"bad{i}", f"mongoexport -c bad{i}", False, "Exit status 1") for i in range(failed)]
    return RunSummary(action=action, database="shop", location="dump", processed=ok, failed=bad)


def test_report_counts_and_export_location(caplog):
    with caplog.at_level(logging.INFO):
        report(make_summary(processed=2, failed=1))
    assert "2 collections processed" in caplog.text
    assert "1 errors" in caplog.text
    assert "Database 'shop' successfully exported to 'dump'" in caplog.text


def test_report_import_message(caplog):
    with caplog.at_level(logging.INFO):
        report(make_summary(action=Action.IMPORT))
    assert "Imported collections from 'dump' successfully to database 'shop'" in caplog.text


def test_report_omits_location_when_nothing_succeeded(caplog):
    with caplog.at_level(logging.INFO):
        report(make_summary(processed=0, failed=2))
    assert "0 collections processed" in caplog.text
    assert "successfully" not in caplog.text


def test_write_csv_report(tmp_path):
    path = write_report(make_summary(), tmp_path / "reports" / "run.csv")
    df = pd.read_csv(path).fillna("")

    assert list(df["collection"]) == ["ok0", "bad0"]
    assert list(df["status"]) == ["processed", "failed"]
    assert list(df["error"]) == ["", "Exit status 1"]
    assert "s3cret" not in path.read_text()


def test_write_json_report(tmp_path):
    path = write_report(make_summary(processed=0, failed=1), tmp_path / "run.json")
    df = pd.read_json(path)
    assert df.loc[0, "collection"] == "bad0"


def test_unsupported_report_format(tmp_path):
    with pytest.raises(ValueError):
        write_report(make_summary(), tmp_path / "run.xlsx")
    assert not (tmp_path / "run.xlsx").exists()
