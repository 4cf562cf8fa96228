# test_records.py
from __future__ import annotations

from pathlib import Path

import dns.exception
import pytest
from dns.rdatatype import RdataType

from checker import ConsistencyChecker, MalformedPTROwnerError
from zones import Record, RecordStore, load_directories, parse_directory, parse_file

TESTDATA = Path(__file__).parent / "testdata"
WORKING = TESTDATA / "working"


def _store(*records: Record) -> RecordStore:
    rr = RecordStore()
    for r in records:
        rr.add(r)
    return rr


# ----------------------------
# Record
# ----------------------------
def test_record_variants_expose_their_payload():
    a = Record.a("host.zone.tld.", "10.0.0.1")
    ptr = Record.ptr("1.0.0.10.in-addr.arpa.", "host.zone.tld.")

    assert a.rtype == RdataType.A
    assert a.address == "10.0.0.1"
    assert ptr.target == "host.zone.tld."
    assert ptr.type_text == "PTR"

    with pytest.raises(TypeError):
        a.target
    with pytest.raises(TypeError):
        ptr.address


def test_record_accepts_type_mnemonic():
    r = Record("zone.tld.", "ns", "ns1.zone.tld.")
    assert r.rtype == RdataType.NS
    assert r == Record("zone.tld.", RdataType.NS, "ns1.zone.tld.")


# ----------------------------
# RecordStore
# ----------------------------
def test_add_keeps_order_and_partitions_by_type():
    a1 = Record.a("a.zone.tld.", "10.0.0.1")
    p1 = Record.ptr("1.0.0.10.in-addr.arpa.", "a.zone.tld.")
    a2 = Record.a("b.zone.tld.", "10.0.0.2")
    rr = _store(a1, p1, a2)

    assert rr.list() == [a1, p1, a2]
    assert rr.records_of_type(RdataType.A) == [a1, a2]
    assert rr.records_of_type("PTR") == [p1]
    assert rr.types_present() == {RdataType.A, RdataType.PTR}
    assert rr.types_text() == ["A", "PTR"]
    assert len(rr) == 3


def test_missing_type_gives_empty_list():
    rr = _store(Record.a("a.zone.tld.", "10.0.0.1"))
    assert rr.records_of_type(RdataType.AAAA) == []
    assert RecordStore().types_present() == set()


def test_snapshots_are_independent():
    a1 = Record.a("a.zone.tld.", "10.0.0.1")
    rr = _store(a1)

    snap = rr.list()
    snap.append(Record.a("b.zone.tld.", "10.0.0.2"))
    by_type = rr.records_of_type(RdataType.A)
    by_type.clear()

    assert rr.list() == [a1]
    assert rr.records_of_type(RdataType.A) == [a1]


def test_merge_appends_after_existing_records():
    a1 = Record.a("a.zone.tld.", "10.0.0.1")
    a2 = Record.a("b.zone.tld.", "10.0.0.2")
    p1 = Record.ptr("1.0.0.10.in-addr.arpa.", "a.zone.tld.")
    x1 = Record.aaaa("a.zone.tld.", "2001:db8::1")

    left = _store(a1)
    right = _store(p1, a2, x1)
    assert left.merge(right) is left

    assert left.list() == [a1, p1, a2, x1]
    assert left.records_of_type(RdataType.A) == [a1, a2]
    assert left.records_of_type(RdataType.PTR) == [p1]
    assert left.records_of_type(RdataType.AAAA) == [x1]
    # the merged-in store is untouched
    assert right.list() == [p1, a2, x1]


def test_merge_into_empty_and_with_itself():
    a1 = Record.a("a.zone.tld.", "10.0.0.1")
    rr = RecordStore().merge(_store(a1))
    assert rr.list() == [a1]

    rr.merge(rr)
    assert rr.list() == [a1, a1]
    assert rr.records_of_type(RdataType.A) == [a1, a1]


# ----------------------------
# Parsing
# ----------------------------
def test_parse_file_loads_absolute_lowercase_names():
    rr = parse_file(str(WORKING / "zone.tld.zone"))

    assert len(rr) == 9
    assert len(rr.records_of_type(RdataType.A)) == 5
    assert len(rr.records_of_type(RdataType.AAAA)) == 1
    assert len(rr.records_of_type(RdataType.SOA)) == 1
    assert len(rr.records_of_type(RdataType.NS)) == 1

    names = {r.name for r in rr.records_of_type(RdataType.A)}
    assert names == {"ns1.zone.tld.", "host.zone.tld.", "multi.zone.tld.", "orphan.zone.tld."}
    (cname,) = rr.records_of_type(RdataType.CNAME)
    assert cname.value == "host.zone.tld."
    assert all(r.source == str(WORKING / "zone.tld.zone") for r in rr)


def test_parse_file_appends_to_given_store():
    rr = parse_file(str(WORKING / "zone.tld.zone"))
    parse_file(str(WORKING / "0.0.10.in-addr.arpa.zone"), store=rr)

    assert len(rr) == 15
    ptrs = {(r.name, r.target) for r in rr.records_of_type(RdataType.PTR)}
    assert ("1.0.0.10.in-addr.arpa.", "host.zone.tld.") in ptrs
    assert len(ptrs) == 4


def test_parse_directory():
    rr = parse_directory(str(WORKING))

    assert len(rr) == 18
    assert rr.types_text() == ["A", "AAAA", "CNAME", "NS", "PTR", "SOA"]
    assert len(rr.records_of_type(RdataType.PTR)) == 5


def test_parse_directory_errors_propagate():
    with pytest.raises(dns.exception.DNSException):
        parse_directory(str(TESTDATA / "broken_zone"))

    with pytest.raises(FileNotFoundError):
        parse_directory(str(TESTDATA / "non_existent"))


def test_load_directories_merges_in_order():
    rr = load_directories([str(WORKING), str(TESTDATA / "bad_ptr")])

    assert len(rr) == 18 + 3
    assert rr.list()[-1].source.endswith("bad_ptr/zone.tld.zone")


def test_parse_file_keeps_records_under_every_origin():
    rr = parse_file(str(TESTDATA / "multi_origin" / "mixed.zone"))

    assert {(r.name, r.type_text) for r in rr} == {
        ("host.zone.tld.", "A"),
        ("1.0.0.10.in-addr.arpa.", "PTR"),
        ("orphan.other.tld.", "A"),
        ("blahblah.", "PTR"),
    }

    # the stray PTR owner reaches the checker and fails preparation
    with pytest.raises(MalformedPTROwnerError):
        ConsistencyChecker(rr).prepare()
