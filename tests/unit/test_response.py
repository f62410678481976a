"""
Tests for the answers to QuestionnaireResponse transformer.
"""

import copy
import re

import pytest

from formbridge.errors import (
    InvalidChoiceMetadataError,
    InvalidResourceTypeError,
    UnknownAnswerChoiceError,
    UnsupportedItemTypeError,
)
from formbridge.models.form import AnswerChoice
from formbridge.models.questionnaire import AnswerValueKind
from formbridge.transformers.questionnaire import convert_from_fhir
from formbridge.transformers.response import (
    ResponseTransformer,
    convert_responses,
    current_local_timestamp,
)
from tests.factories import make_choice_item, make_questionnaire


@pytest.fixture
def coded_questionnaire():
    return make_questionnaire(
        [
            {
                "linkId": "color",
                "type": "choice",
                "repeats": True,
                "text": "Favourite colors",
                "answerOption": [
                    {"valueCoding": {"code": "r", "system": "http://example.org", "display": "Red"}},
                    {"valueCoding": {"code": "g", "system": "http://example.org", "display": "Green"}},
                ],
            }
        ]
    )


class TestResponseTransformer:
    """Tests for ResponseTransformer."""

    def test_skeleton(self, questionnaire_one_question):
        response = ResponseTransformer(questionnaire_one_question).transform({})

        assert response.resource_type == "QuestionnaireResponse"
        assert response.questionnaire == "http://example.org/Questionnaire/test"
        assert response.status == "in-progress"
        assert response.item == []

    def test_choice_round_trip(self, questionnaire_one_question):
        """Converting forward then answering should yield a typed choice answer."""
        definition = convert_from_fhir(questionnaire_one_question)
        offered = definition.pages[0].questions[0].choices
        assert "Second choice" in [choice.value for choice in offered]

        response = ResponseTransformer(questionnaire_one_question).transform({"1": "Second choice"})

        assert len(response.item) == 1
        assert response.item[0].link_id == "1"
        assert response.to_fhir()["item"][0]["answer"] == [{"valueString": "Second choice"}]

    def test_coded_choices(self, coded_questionnaire):
        response = ResponseTransformer(coded_questionnaire).transform({"color": ["Green", "Red"]})

        assert response.to_fhir()["item"][0]["answer"] == [
            {"valueCoding": {"code": "g", "system": "http://example.org", "display": "Green"}},
            {"valueCoding": {"code": "r", "system": "http://example.org", "display": "Red"}},
        ]

    def test_integer_choice_keeps_declared_kind(self):
        item = {
            "linkId": "pain",
            "type": "choice",
            "answerOption": [{"valueInteger": 1}, {"valueInteger": 2}],
        }

        response = ResponseTransformer(make_questionnaire([item])).transform({"pain": 2})

        assert response.item[0].answer[0].kind == AnswerValueKind.INTEGER
        assert response.to_fhir()["item"][0]["answer"] == [{"valueInteger": 2}]

    def test_supplied_choice_metadata(self):
        """Choices supplied by the renderer should take precedence over answerOption."""
        questionnaire = make_questionnaire([make_choice_item("1")])
        choices = {
            "1": [
                {
                    "value": "Other",
                    "text": "Other",
                    "valueType": "valueCoding",
                    "valueCoding": {"code": "oth", "system": "http://example.org", "display": "Other"},
                }
            ]
        }

        response = ResponseTransformer(questionnaire).transform({"1": "Other"}, choices)

        assert response.to_fhir()["item"][0]["answer"] == [
            {"valueCoding": {"code": "oth", "system": "http://example.org", "display": "Other"}}
        ]

    def test_supplied_choice_models(self):
        questionnaire = make_questionnaire([make_choice_item("1")])
        choices = {"1": [AnswerChoice(value="7", text="7", value_type=AnswerValueKind.STRING)]}

        response = ResponseTransformer(questionnaire).transform({"1": "7"}, choices)

        assert response.to_fhir()["item"][0]["answer"] == [{"valueString": "7"}]

    def test_coded_choice_without_coding(self):
        """A valueCoding choice must carry the coding to answer with."""
        questionnaire = make_questionnaire([make_choice_item("1")])
        choices = {"1": [{"value": "Other", "text": "Other", "valueType": "valueCoding"}]}

        with pytest.raises(InvalidChoiceMetadataError) as exc_info:
            ResponseTransformer(questionnaire).transform({"1": "Other"}, choices)

        assert exc_info.value.link_id == "1"
        assert "coding" in exc_info.value.reason

    def test_choice_without_value_type(self):
        """An untyped choice should not fall back to valueString."""
        questionnaire = make_questionnaire([make_choice_item("1")])
        choices = {"1": [{"value": 3, "text": "3"}]}

        with pytest.raises(InvalidChoiceMetadataError) as exc_info:
            ResponseTransformer(questionnaire).transform({"1": 3}, choices)

        assert exc_info.value.details["choice"] == {"value": 3, "text": "3", "ordinalValue": 0.0}

    def test_choice_with_coding_only(self):
        questionnaire = make_questionnaire([make_choice_item("1")])
        choices = {"1": [{"value": "Yes", "text": "Yes", "valueCoding": {"code": "y", "display": "Yes"}}]}

        response = ResponseTransformer(questionnaire).transform({"1": "Yes"}, choices)

        assert response.to_fhir()["item"][0]["answer"] == [{"valueCoding": {"code": "y", "display": "Yes"}}]

    def test_malformed_choice(self):
        questionnaire = make_questionnaire([make_choice_item("1")])
        choices = {"1": [{"value": "x", "valueType": "valueQuantity"}]}

        with pytest.raises(InvalidChoiceMetadataError) as exc_info:
            ResponseTransformer(questionnaire).transform({"1": "x"}, choices)

        assert exc_info.value.details["choice"] == {"value": "x", "valueType": "valueQuantity"}

    def test_unknown_choice(self, questionnaire_one_question):
        with pytest.raises(UnknownAnswerChoiceError) as exc_info:
            ResponseTransformer(questionnaire_one_question).transform({"1": "Fourth choice"})

        assert exc_info.value.link_id == "1"

    @pytest.mark.parametrize(
        "item_type,value,key",
        [
            ("boolean", True, "valueBoolean"),
            ("integer", 42, "valueInteger"),
            ("decimal", 1.5, "valueDecimal"),
            ("date", "2024-01-15", "valueDate"),
            ("dateTime", "2024-01-15T10:30", "valueDateTime"),
            ("string", "hello", "valueString"),
        ],
    )
    def test_non_choice_types(self, item_type, value, key):
        questionnaire = make_questionnaire([{"linkId": "1", "type": item_type, "text": "Q"}])

        response = ResponseTransformer(questionnaire).transform({"1": value})

        assert response.to_fhir()["item"][0]["answer"] == [{key: value}]

    def test_multiple_values(self):
        questionnaire = make_questionnaire(
            [{"linkId": "1", "type": "string", "repeats": True, "text": "Names"}]
        )

        response = ResponseTransformer(questionnaire).transform({"1": ["a", "b"]})

        assert response.to_fhir()["item"][0]["answer"] == [
            {"valueString": "a"},
            {"valueString": "b"},
        ]

    def test_only_intersection_in_source_order(self, questionnaire_multiple_questions):
        """Should emit answered items in Questionnaire order and ignore unknown linkIds."""
        answers = {"2": True, "unknown": "x", "1": "Third choice"}

        response = ResponseTransformer(questionnaire_multiple_questions).transform(answers)

        assert [item.link_id for item in response.item] == ["1", "2"]

    def test_group_answer_rejected(self, questionnaire_nested_items):
        with pytest.raises(UnsupportedItemTypeError):
            ResponseTransformer(questionnaire_nested_items).transform({"1": "x"})

    def test_does_not_mutate_inputs(self, coded_questionnaire):
        answers = {"color": ["Red"]}
        original_answers = copy.deepcopy(answers)
        original_questionnaire = copy.deepcopy(coded_questionnaire)

        ResponseTransformer(coded_questionnaire).transform(answers)

        assert answers == original_answers
        assert coded_questionnaire == original_questionnaire

    def test_rejects_non_questionnaire(self):
        with pytest.raises(InvalidResourceTypeError):
            ResponseTransformer({"resourceType": "QuestionnaireResponse"})

    def test_convert_responses(self, questionnaire_one_question):
        response = convert_responses(questionnaire_one_question, {"1": "First choice"})

        assert response.item[0].answer[0].value == "First choice"


class TestCurrentLocalTimestamp:
    """Tests for current_local_timestamp."""

    def test_format(self):
        """Should be ISO-8601 with milliseconds and no zone designator."""
        timestamp = current_local_timestamp()

        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}", timestamp)

    def test_authored_is_set(self, questionnaire_one_question):
        response = convert_responses(questionnaire_one_question, {})

        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}", response.authored)
