# test_reporting.py
from __future__ import annotations

from pathlib import Path

from checker import ConsistencyChecker, ConsistencyScanner
from checker.models import CheckResult
from reporting.assembler import Assemble
from reporting.formatting import format_failed
from reporting.recommendations import Recommendations
from reporting.report import analytics, failures_frame
from zones import Record, parse_directory

WORKING = Path(__file__).parent / "testdata" / "working"


def _result() -> CheckResult:
    return ConsistencyScanner(ConsistencyChecker(parse_directory(str(WORKING)))).scan()


# ----------------------------
# format_failed
# ----------------------------
def test_format_failed_empty():
    assert format_failed([], "\n") == ""


def test_format_failed_dedups_in_first_seen_order():
    failed = [
        Record.a("b.zone.tld.", "10.0.0.2"),
        Record.a("a.zone.tld.", "10.0.0.1"),
        Record.a("b.zone.tld.", "10.0.0.3"),
        Record.a("a.zone.tld.", "10.0.0.4"),
        Record.a("c.zone.tld.", "10.0.0.5"),
    ]
    assert format_failed(failed, ", ") == "b.zone.tld., a.zone.tld., c.zone.tld."


def test_format_failed_repeated_first_name():
    failed = [Record.a("a.zone.tld.", "10.0.0.1"), Record.a("a.zone.tld.", "10.0.0.2")]
    assert format_failed(failed, "\n") == "a.zone.tld."


# ----------------------------
# Recommendations
# ----------------------------
def test_recommendations_known_and_unknown():
    assert "PTR" in Recommendations.recommend("A_WITHOUT_PTR")
    assert Recommendations.recommend("a_without_ptr") == Recommendations.recommend("A_WITHOUT_PTR")
    assert Recommendations.recommend("SOMETHING_ELSE")


# ----------------------------
# Assemble
# ----------------------------
def test_assemble_builds_json_safe_response():
    out = Assemble().build(
        target="testdata/working",
        result=_result(),
        meta={"version": "test"},
    )

    assert out["target"] == "testdata/working"
    assert out["meta"] == {"version": "test"}
    assert out["summary"]["issues"] == 2
    assert out["summary"]["error"] == 2
    assert out["summary"]["score"] == 80

    issues = {(f["issue"], f["name"]) for f in out["findings"]}
    assert issues == {
        ("A_WITHOUT_PTR", "orphan.zone.tld."),
        ("PTR_WITHOUT_FORWARD", "99.0.0.10.in-addr.arpa."),
    }
    assert {f["data"]["check"] for f in out["findings"]} == {"a", "ptr"}
    assert all(f["recommendation"] for f in out["findings"])
    assert out["overall"] == "fail"
    assert out["counts"] == {"a": 1, "aaaa": 0, "ptr": 1}


def test_assemble_clean_result():
    out = Assemble().build(target="x", result=CheckResult(overall="pass"))
    assert out["findings"] == []
    assert out["summary"]["issues"] == 0
    assert out["summary"]["score"] == 100


# ----------------------------
# DataFrame report
# ----------------------------
def test_failures_frame_orders_ptr_first():
    df = failures_frame(_result())

    assert list(df.columns) == ["issue", "name", "type", "value", "recommendation"]
    assert list(df["issue"]) == ["PTR_WITHOUT_FORWARD", "A_WITHOUT_PTR"]
    assert list(df["name"]) == ["99.0.0.10.in-addr.arpa.", "orphan.zone.tld."]


def test_failures_frame_clean_gives_ok_row():
    df = failures_frame(CheckResult(overall="pass"))
    assert list(df["issue"]) == ["OK"]


def test_analytics_counts():
    df = failures_frame(_result(), include_debug=True)
    a = analytics(df)

    by_issue = dict(zip(a["counts_by_issue"]["issue"], a["counts_by_issue"]["count"]))
    assert by_issue == {"A_WITHOUT_PTR": 1, "PTR_WITHOUT_FORWARD": 1}
    assert a["counts_by_source"]["count"].sum() == 2


def test_analytics_empty_for_clean_result():
    a = analytics(failures_frame(CheckResult(overall="pass")))
    assert a["counts_by_issue"].empty
    assert a["counts_by_source"].empty
