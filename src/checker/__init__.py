"""
Forward/reverse DNS consistency checks.

Every A/AAAA name needs a PTR pointing back to it, and every PTR needs a
forward record for the reversed address.

Public entrypoints: ConsistencyChecker, ConsistencyScanner, CheckerHandle
"""

from .checker import ConsistencyChecker, IndexState, reverse_key
from .errors import CheckerError, MalformedAddressError, MalformedPTROwnerError
from .handle import CheckerHandle, NoCheckerLoaded
from .models import CheckResult, Finding
from .scanner import ConsistencyScanner

__all__ = [
    "CheckResult",
    "CheckerError",
    "CheckerHandle",
    "ConsistencyChecker",
    "ConsistencyScanner",
    "Finding",
    "IndexState",
    "MalformedAddressError",
    "MalformedPTROwnerError",
    "NoCheckerLoaded",
    "reverse_key",
]
