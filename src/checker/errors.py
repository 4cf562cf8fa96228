from typing import Optional

from zones.models import Record


class CheckerError(Exception):
    """Base error for checker preparation failures."""

    issue = "PREPARATION_FAILED"


class MalformedAddressError(CheckerError, ValueError):
    """Raised when an A/AAAA address cannot be turned into a reverse-lookup name."""

    issue = "MALFORMED_ADDRESS"

    def __init__(self, record: Record, detail: Optional[str] = None):
        self.record = record
        self.address = record.value
        msg = f"unable to reverse the {record.type_text} record {record.name}: {record.value!r}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class MalformedPTROwnerError(CheckerError, ValueError):
    """Raised when a PTR owner is outside in-addr.arpa. and ip6.arpa."""

    issue = "MALFORMED_PTR_OWNER"

    def __init__(self, record: Record):
        self.record = record
        self.owner = record.name
        super().__init__(f"PTR record doesn't match IPv4 or IPv6: {record.name}")
