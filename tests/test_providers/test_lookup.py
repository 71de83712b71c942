"""Tests for the typed provider lookup result."""

from scanner.providers.result import Lookup, LookupStatus


def test_found_is_ok() -> None:
    lookup = Lookup.found({"a": 1})
    assert lookup.ok
    assert lookup.value == {"a": 1}
    assert lookup.error is None


def test_absence_and_failure_are_distinct() -> None:
    assert Lookup.not_found().status is LookupStatus.NOT_FOUND
    assert Lookup.timeout("slow").status is LookupStatus.TIMEOUT
    assert Lookup.failed("boom").status is LookupStatus.ERROR
    assert not any(lk.ok for lk in (Lookup.not_found(), Lookup.timeout("x"), Lookup.failed("x")))


def test_error_message_falls_back_to_exception_type() -> None:
    assert Lookup.failed(TimeoutError()).error == "TimeoutError"
    assert Lookup.timeout(ValueError("bad json")).error == "bad json"
