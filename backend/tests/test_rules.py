"""Unit tests for the individual rules and their parameter checks."""

import dataclasses

import pytest

from recordguard.validators import (
    RuleKind,
    RuleSetConfigError,
    datetime_format,
    each,
    email,
    fixed_length,
    length,
    numeric,
    one_of,
    pattern,
    required,
    value_range,
)


@pytest.mark.parametrize("value", ["abc", "x" * 50, "John Doe"])
def test_length_accepts_inclusive_bounds(value):
    assert length(3, 50).check(value) is None


@pytest.mark.parametrize("value", ["ab", "x" * 51])
def test_length_rejects_outside_bounds(value):
    reason = length(3, 50).check(value)
    assert reason is not None
    assert "between 3 and 50" in reason


@pytest.mark.parametrize("value", [0, 100, 50, 0.5])
def test_range_accepts_inclusive_bounds(value):
    assert value_range(0, 100).check(value) is None


@pytest.mark.parametrize("value", [-1, 101, 100.01])
def test_range_rejects_outside_bounds(value):
    assert value_range(0, 100).check(value) is not None


def test_range_does_not_accept_booleans():
    assert not value_range(0, 100).accepts(True)
    assert value_range(0, 100).accepts(7)


def test_numeric_only_accepts_ascii_digits():
    rule = numeric()
    assert rule.check("55462") is None
    assert rule.check("5546a") is not None
    assert rule.check("-123") is not None
    assert rule.check("²³") is not None


def test_fixed_length():
    rule = fixed_length(5)
    assert rule.check("55462") is None
    assert rule.check("5546") == "length must be exactly 5 (got 4)"
    assert rule.check("554622") == "length must be exactly 5 (got 6)"


@pytest.mark.parametrize("value", [
    "2006-01-02T15:04:05Z",
    "2006-01-02T15:04:05+07:00",
    "1990-12-31T23:59:59-05:00",
])
def test_datetime_rfc3339_accepts_timestamps(value):
    assert datetime_format().check(value) is None


@pytest.mark.parametrize("value", ["", "2006-01-02", "yesterday", "2006-13-02T15:04:05Z"])
def test_datetime_rfc3339_rejects_other_strings(value):
    reason = datetime_format().check(value)
    assert reason is not None
    assert "date-time" in reason


def test_datetime_custom_format():
    rule = datetime_format("%Y-%m-%d")
    assert rule.check("2024-02-29") is None
    assert rule.check("2023-02-29") is not None


def test_email():
    rule = email()
    assert rule.check("john@example.com") is None
    assert rule.check("john.doe+tag@mail.example.org") is None
    assert rule.check("not-an-email") is not None
    assert rule.check("john@") is not None


def test_one_of():
    rule = one_of("CA", "NY")
    assert rule.check("CA") is None
    assert rule.check("TX") == "must be one of: CA, NY"


def test_pattern_must_match_whole_value():
    rule = pattern(r"[A-Z]{2}")
    assert rule.check("CA") is None
    assert rule.check("CAL") is not None


def test_required_distinguishes_missing_and_empty():
    rule = required()
    assert rule.check(None) == "is required"
    assert rule.check("") == "must not be empty"
    assert rule.check([]) == "must not be empty"
    assert rule.check("x") is None
    assert rule.check(0) is None


def test_each_reports_failing_elements_by_index():
    rule = each(fixed_length(2))
    failures = rule.check_elements(["CA", "NEW", "NY", "X"])
    assert failures == [
        (1, RuleKind.FIXED_LENGTH, "length must be exactly 2 (got 3)"),
        (3, RuleKind.FIXED_LENGTH, "length must be exactly 2 (got 1)"),
    ]


def test_each_on_empty_sequence_passes():
    assert each(required()).check([]) is None


def test_each_required_flags_empty_elements():
    failures = each(required()).check_elements(["a", "", None])
    assert [(i, kind) for i, kind, _ in failures] == [
        (1, RuleKind.REQUIRED),
        (2, RuleKind.REQUIRED),
    ]


def test_each_skips_empty_elements_for_optional_inner_rules():
    assert each(numeric()).check_elements(["12", "", None]) == []


def test_each_reports_wrong_element_types():
    failures = each(numeric()).check_elements(["12", 12])
    assert failures[0][:2] == (1, RuleKind.TYPE_MISMATCH)


def test_rules_are_immutable():
    rule = length(3, 50)
    with pytest.raises(dataclasses.FrozenInstanceError):
        rule.min = 0


def test_rules_compare_by_parameters():
    assert length(3, 50) == length(3, 50)
    assert length(3, 50) != length(3, 49)
    assert len({required(), required()}) == 1


@pytest.mark.parametrize("factory", [
    lambda: length(5, 3),
    lambda: length(-1, 3),
    lambda: length(1.5, 3),
    lambda: value_range(10, 0),
    lambda: value_range("0", 10),
    lambda: fixed_length(-2),
    lambda: datetime_format(""),
    lambda: one_of(),
    lambda: pattern("[unclosed"),
    lambda: each("required"),
    lambda: each(each(required())),
])
def test_invalid_parameters_fail_at_construction(factory):
    with pytest.raises(RuleSetConfigError):
        factory()
