from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from zones.models import Record

# check name -> issue code reported for its failed records
ISSUES = {
    "a": "A_WITHOUT_PTR",
    "aaaa": "AAAA_WITHOUT_PTR",
    "ptr": "PTR_WITHOUT_FORWARD",
}

DETAILS = {
    "A_WITHOUT_PTR": "No PTR record points back to this name for any of its IPv4 addresses.",
    "AAAA_WITHOUT_PTR": "No PTR record points back to this name for any of its IPv6 addresses.",
    "PTR_WITHOUT_FORWARD": "None of the PTR targets has an A/AAAA record for the reversed address.",
}


@dataclass
class Finding:
    name: str
    issue: str
    severity: str = "error"  # error|warning|info
    rtype: Optional[str] = None
    value: Optional[str] = None
    source: Optional[str] = None
    detail: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, check: str, record: Record) -> "Finding":
        issue = ISSUES[check]
        return cls(
            name=record.name,
            issue=issue,
            rtype=record.type_text,
            value=record.value,
            source=record.source,
            detail=DETAILS[issue],
            data={"check": check, "ttl": record.ttl},
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CheckResult:
    """
    Outcome of running every forward/reverse check over one store.

    `failed` keeps the raw records per check ("a", "aaaa", "ptr") so callers
    can still format them; `findings` is the same data in report form.
    """

    overall: str = "unknown"  # pass|fail|unknown
    types: List[str] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)
    failed: Dict[str, List[Record]] = field(default_factory=dict)
    findings: List[Finding] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall": self.overall,
            "types": self.types,
            "counts": self.counts,
            "failed": {k: [r.to_dict() for r in v] for k, v in self.failed.items()},
            "findings": [f.to_dict() for f in self.findings],
        }

    def finalize_overall(self) -> None:
        self.overall = "fail" if self.findings else "pass"
