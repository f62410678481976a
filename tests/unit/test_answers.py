"""
Tests for answer choice extraction.
"""

import pytest

from formbridge.errors import (
    InvalidOrdinalValueError,
    MissingCodingDisplayError,
    UnsupportedAnswerKindError,
    UnsupportedAnswerValueSetError,
)
from formbridge.models.questionnaire import AnswerValueKind
from formbridge.transformers.answers import extract_answers, get_ordinal_value
from tests.factories import ORDINAL_VALUE_URL, make_choice_item, ordinal_extension


class TestExtractAnswers:
    """Tests for extract_answers."""

    def test_string_options(self):
        choices = extract_answers(make_choice_item())

        assert [choice.value for choice in choices] == [
            "First choice",
            "Second choice",
            "Third choice",
        ]
        assert [choice.text for choice in choices] == [
            "First choice",
            "Second choice",
            "Third choice",
        ]
        assert all(choice.value_type == AnswerValueKind.STRING for choice in choices)

    def test_no_options(self):
        """Items without options should produce no choices, not an error."""
        assert extract_answers({"linkId": "1", "type": "string"}) is None

    def test_integer_option_text(self):
        """Text should be the stringified value."""
        item = {"linkId": "1", "answerOption": [{"valueInteger": 5}, {"valueInteger": 0}]}

        choices = extract_answers(item)

        assert choices[0].value == 5
        assert choices[0].text == "5"
        assert choices[1].value == 0
        assert choices[1].value_type == AnswerValueKind.INTEGER

    def test_date_and_time_options(self):
        item = {
            "linkId": "1",
            "answerOption": [{"valueDate": "2024-01-15"}, {"valueTime": "08:30:00"}],
        }

        choices = extract_answers(item)

        assert choices[0].value_type == AnswerValueKind.DATE
        assert choices[1].value_type == AnswerValueKind.TIME

    def test_coding_option_uses_display(self):
        item = {
            "linkId": "1",
            "answerOption": [
                {"valueCoding": {"code": "y", "system": "http://example.org", "display": "Yes"}}
            ],
        }

        choice = extract_answers(item)[0]

        assert choice.value == "Yes"
        assert choice.text == "Yes"
        assert choice.value_type == AnswerValueKind.CODING
        assert choice.value_coding.code == "y"
        assert choice.value_coding.system == "http://example.org"

    def test_coding_without_display(self):
        item = {"linkId": "1", "answerOption": [{"valueCoding": {"code": "y"}}]}

        with pytest.raises(MissingCodingDisplayError) as exc_info:
            extract_answers(item)

        assert exc_info.value.link_id == "1"

    def test_unsupported_kind(self):
        item = {"linkId": "1", "answerOption": [{"valueReference": {"reference": "Patient/1"}}]}

        with pytest.raises(UnsupportedAnswerKindError) as exc_info:
            extract_answers(item)

        assert exc_info.value.keys == ["valueReference"]

    def test_value_set(self):
        item = {"linkId": "1", "answerValueSet": "http://example.org/ValueSet/yn"}

        with pytest.raises(UnsupportedAnswerValueSetError):
            extract_answers(item)

    def test_ordinal_values(self):
        item = {
            "linkId": "1",
            "answerOption": [
                {"valueString": "Never", "extension": [ordinal_extension(1)]},
                {"valueString": "Sometimes", "extension": [ordinal_extension(2)]},
                {"valueString": "Always"},
            ],
        }

        choices = extract_answers(item)

        assert [choice.ordinal_value for choice in choices] == [1, 2, 0]


class TestGetOrdinalValue:
    """Tests for get_ordinal_value."""

    def test_default(self):
        assert get_ordinal_value({"valueString": "x"}) == 0

    def test_unrelated_extensions(self):
        """Options with only other extensions should still default to 0."""
        option = {"valueString": "x", "extension": [{"url": "http://example.org/other"}]}

        assert get_ordinal_value(option) == 0

    def test_decimal(self):
        assert get_ordinal_value({"extension": [ordinal_extension(2.5)]}) == 2.5

    def test_missing_decimal(self):
        """A present but empty ordinalValue extension is malformed, not 0."""
        option = {"valueString": "x", "extension": [{"url": ORDINAL_VALUE_URL}]}

        with pytest.raises(InvalidOrdinalValueError):
            get_ordinal_value(option)

    def test_non_numeric_decimal(self):
        item = make_choice_item("7")
        item["answerOption"][0]["extension"] = [{"url": ORDINAL_VALUE_URL, "valueDecimal": "high"}]

        with pytest.raises(InvalidOrdinalValueError) as exc_info:
            extract_answers(item)

        assert exc_info.value.link_id == "7"
