from typing import Any, Dict, List, Optional
from fastapi.encoders import jsonable_encoder

from checker.models import CheckResult
from .recommendations import Recommendations

# Points taken off the score per failed record, by severity.
PENALTY = {"error": 10, "warning": 5}


class Assemble:
    """
    Turns a CheckResult into the response printed by `ns-checker --json` and
    returned by GET /check.
    """

    def build(
        self,
        target: str,
        result: CheckResult,
        meta: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Args:
            target: What was checked (the zone directories, joined).
            result: Output of ConsistencyScanner.scan().
            meta: Optional metadata (version, source, generation).

        Returns:
            A dict containing only JSON-safe values.
        """
        findings = [self._finding(f.to_dict()) for f in result.findings]

        response: Dict[str, Any] = {
            "target": target,
            "overall": result.overall,
            "types": result.types,
            "counts": result.counts,
            "findings": findings,
            "summary": self._summarize(findings, result.counts),
            "meta": meta or {},
        }
        return jsonable_encoder(response)

    def _finding(self, f: Dict[str, Any]) -> Dict[str, Any]:
        f["recommendation"] = Recommendations.recommend(f["issue"])
        return f

    def _summarize(self, findings: List[Dict[str, Any]], counts: Dict[str, int]) -> Dict[str, Any]:
        """
        Failed records per severity and per check, plus a score (0..100).
        """
        by_severity = {"error": 0, "warning": 0, "info": 0}
        for f in findings:
            by_severity[f["severity"]] = by_severity.get(f["severity"], 0) + 1

        score = 100 - sum(PENALTY.get(sev, 0) * n for sev, n in by_severity.items())
        score = max(0, min(100, score))

        return {
            "issues": len(findings),
            **by_severity,
            "failed_by_check": dict(counts),
            "score": score,
        }
