# Tabular view of a CheckResult, for the CLI table output and quick analytics.

from typing import Any, Dict, List
import pandas as pd

from checker.models import CheckResult
from .recommendations import Recommendations

DEFAULT_COLUMNS = ["issue", "name", "type", "value", "recommendation"]

DEBUG_COLUMNS = ["source", "ttl"]

ISSUE_RANK = {
    "PTR_WITHOUT_FORWARD": 0,
    "A_WITHOUT_PTR": 1,
    "AAAA_WITHOUT_PTR": 2,
    "OK": 99,
}


def failures_frame(result: CheckResult, include_debug: bool = False) -> pd.DataFrame:
    rows: List[Dict[str, Any]] = []

    if not result.findings:
        rows.append({
            "issue": "OK",
            "name": "",
            "type": "",
            "value": "",
            "recommendation": Recommendations.recommend("OK"),
        })

    for f in result.findings:
        row = {
            "issue": f.issue,
            "name": f.name,
            "type": f.rtype,
            "value": f.value,
            "recommendation": Recommendations.recommend(f.issue),
        }
        if include_debug:
            row.update({
                "source": f.source,
                "ttl": f.data.get("ttl"),
            })
        rows.append(row)

    df = pd.DataFrame(rows)

    df["_rank"] = df["issue"].map(ISSUE_RANK).fillna(50).astype(int)
    df = df.sort_values(["_rank", "name", "value"]).drop(columns=["_rank"]).reset_index(drop=True)

    wanted = DEFAULT_COLUMNS + (DEBUG_COLUMNS if include_debug else [])
    return df[[c for c in wanted if c in df.columns]]


def analytics(df: pd.DataFrame) -> Dict[str, pd.DataFrame]:
    """Counts by issue, and by source file when the frame carries one."""
    empty = {
        "counts_by_issue": pd.DataFrame(columns=["issue", "count"]),
        "counts_by_source": pd.DataFrame(columns=["source", "count"]),
    }
    if df is None or df.empty:
        return empty

    broken = df[df["issue"] != "OK"]
    if broken.empty:
        return empty

    counts_by_issue = (
        broken.groupby("issue")
              .size()
              .reset_index(name="count")
              .sort_values(["count", "issue"], ascending=[False, True])
              .reset_index(drop=True)
    )

    if "source" in broken.columns:
        counts_by_source = (
            broken.fillna({"source": "<unknown>"})
                  .groupby("source")
                  .size()
                  .reset_index(name="count")
                  .sort_values(["count", "source"], ascending=[False, True])
                  .reset_index(drop=True)
        )
    else:
        counts_by_source = empty["counts_by_source"]

    return {
        "counts_by_issue": counts_by_issue,
        "counts_by_source": counts_by_source,
    }
