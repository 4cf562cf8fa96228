from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import dns.rdatatype
from dns.rdatatype import RdataType

RecordTag = Union[RdataType, int, str]


def to_tag(rtype: RecordTag) -> RdataType:
    """Accept an RdataType, its integer value or its mnemonic ("PTR")."""
    if isinstance(rtype, str):
        return dns.rdatatype.from_text(rtype.strip().upper())
    return RdataType.make(rtype)


@dataclass(frozen=True)
class Record:
    """
    One parsed resource record.

    The checker only branches on A, AAAA and PTR; every other type is carried
    opaquely with its rdata text in `value`.

      - A:    value is the IPv4 address
      - AAAA: value is the IPv6 address
      - PTR:  value is the target name (fully qualified, trailing dot)
    """

    name: str
    rtype: RdataType
    value: str
    ttl: int = 0
    source: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rtype", to_tag(self.rtype))

    @classmethod
    def a(cls, name: str, address: str, ttl: int = 0, source: Optional[str] = None) -> "Record":
        return cls(name=name, rtype=RdataType.A, value=address, ttl=ttl, source=source)

    @classmethod
    def aaaa(cls, name: str, address: str, ttl: int = 0, source: Optional[str] = None) -> "Record":
        return cls(name=name, rtype=RdataType.AAAA, value=address, ttl=ttl, source=source)

    @classmethod
    def ptr(cls, name: str, target: str, ttl: int = 0, source: Optional[str] = None) -> "Record":
        return cls(name=name, rtype=RdataType.PTR, value=target, ttl=ttl, source=source)

    @classmethod
    def from_rdata(cls, name: Any, ttl: int, rdata: Any, source: Optional[str] = None) -> "Record":
        """Build a record from a dnspython (name, ttl, rdata) triple."""
        owner = name.to_text().lower()
        if rdata.rdtype in (RdataType.A, RdataType.AAAA):
            value = rdata.address
        elif rdata.rdtype == RdataType.PTR:
            value = rdata.target.to_text().lower()
        else:
            value = rdata.to_text()
        return cls(name=owner, rtype=rdata.rdtype, value=value, ttl=int(ttl), source=source)

    @property
    def type_text(self) -> str:
        return dns.rdatatype.to_text(self.rtype)

    @property
    def address(self) -> str:
        if self.rtype not in (RdataType.A, RdataType.AAAA):
            raise TypeError(f"{self.type_text} record has no address")
        return self.value

    @property
    def target(self) -> str:
        if self.rtype != RdataType.PTR:
            raise TypeError(f"{self.type_text} record has no target")
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type_text,
            "value": self.value,
            "ttl": self.ttl,
            "source": self.source,
        }

    def __str__(self) -> str:
        return f"{self.name} {self.ttl} IN {self.type_text} {self.value}"
