from __future__ import annotations

from .checker import ConsistencyChecker
from .models import CheckResult, Finding


class ConsistencyScanner:
    def __init__(self, checker: ConsistencyChecker):
        self.checker = checker

    def scan(self) -> CheckResult:
        """
        Run the A, AAAA and PTR checks and collect their failures.

        Preparation errors propagate; nothing is reported for a store that
        could not be indexed.
        """
        res = CheckResult(types=self.checker.store.types_text())

        res.failed = {
            "a": self.checker.check_a(),
            "aaaa": self.checker.check_aaaa(),
            "ptr": self.checker.check_ptr(),
        }
        res.counts = {name: len(records) for name, records in res.failed.items()}

        findings = [Finding.from_record(name, r) for name, records in res.failed.items() for r in records]
        # Index iteration order is not meaningful; sort for stable output.
        findings.sort(key=lambda f: (f.issue, f.name, f.value or ""))
        res.findings = findings

        res.finalize_overall()
        return res
