# tests/test_attribute.py
import re

import pytest

from spayd.attribute import InvalidAttributeValue, PatternRule, PredicateRule, SpaydAttribute
from spayd.models import PaymentRecord


class TestSpaydAttribute:
    """Валидация происходит один раз – в конструкторе."""

    def test_serializes_as_name_colon_value(self):
        attr = SpaydAttribute("AM", "450.00", PatternRule(re.compile(r"\d+\.\d\d")))
        assert str(attr) == "AM:450.00"
        assert attr.name == "AM"
        assert attr.value == "450.00"

    def test_without_rule_accepts_anything(self):
        assert str(SpaydAttribute("DT", "whatever")) == "DT:whatever"

    def test_pattern_must_match_fully(self):
        rule = PatternRule(re.compile(r"\d{1,3}"))
        assert str(SpaydAttribute("PT", "123", rule)) == "PT:123"
        with pytest.raises(InvalidAttributeValue):
            SpaydAttribute("PT", "1234", rule)
        with pytest.raises(InvalidAttributeValue):
            SpaydAttribute("PT", "x12", rule)

    def test_predicate_rule(self):
        rule = PredicateRule(lambda value, _record: value.startswith("CZ"))
        SpaydAttribute("ACC", "CZ123", rule)
        with pytest.raises(InvalidAttributeValue) as exc_info:
            SpaydAttribute("ACC", "SK123", rule)
        assert exc_info.value.name == "ACC"
        assert exc_info.value.value == "SK123"

    def test_predicate_rule_sees_the_record(self):
        seen = []

        def check(value, record):
            seen.append(record)
            return record is not None and record.nt == "E"

        record = PaymentRecord(nt="E")
        SpaydAttribute("NTA", "a@b.cz", PredicateRule(check), record)
        assert seen == [record]

        with pytest.raises(InvalidAttributeValue):
            SpaydAttribute("NTA", "a@b.cz", PredicateRule(check))


def test_error_message_format():
    err = InvalidAttributeValue("AM", "450,00")
    assert str(err) == "Invalid value for attribute AM: 450,00"
    assert isinstance(err, ValueError)


def test_pattern_rule_rejects_non_strings():
    assert PatternRule(re.compile(r"\d+")).matches(123) is False
