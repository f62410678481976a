"""
Form answers to FHIR QuestionnaireResponse transformer.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from formbridge.config.logging import get_logger
from formbridge.constants import QUESTIONNAIRE_RESOURCE_TYPE
from formbridge.errors import (
    InvalidChoiceMetadataError,
    InvalidResourceTypeError,
    UnknownAnswerChoiceError,
    UnsupportedItemTypeError,
)
from formbridge.models.form import AnswerChoice
from formbridge.models.questionnaire import AnswerValueKind, QuestionnaireItemType
from formbridge.models.response import AnswerValue, QuestionnaireResponse, ResponseItem
from formbridge.transformers.answers import extract_answers

logger = get_logger(__name__)

ChoiceMetadata = Mapping[str, Sequence[AnswerChoice | dict[str, Any]]]


def current_local_timestamp() -> str:
    """Local wall-clock time as ISO-8601 with milliseconds and no zone designator."""
    return datetime.now().isoformat(timespec="milliseconds")


class ResponseTransformer:
    """
    Builds QuestionnaireResponse resources for one Questionnaire.

    The Questionnaire supplies item types and the declared kind of each
    answer choice, so submitted literals can be re-typed.
    """

    def __init__(self, questionnaire: dict[str, Any]):
        """
        Initialize the transformer.

        Args:
            questionnaire: The FHIR Questionnaire the answers belong to
        """
        resource_type = questionnaire.get("resourceType")
        if resource_type != QUESTIONNAIRE_RESOURCE_TYPE:
            raise InvalidResourceTypeError(resource_type)
        self.questionnaire = questionnaire

    def transform(
        self,
        answers: Mapping[str, Any],
        choices: ChoiceMetadata | None = None,
    ) -> QuestionnaireResponse:
        """
        Convert submitted answers into a QuestionnaireResponse.

        Only root items that have an entry in ``answers`` are emitted, in
        Questionnaire order. Answers for unknown linkIds are ignored.

        Args:
            answers: Submitted value (or list of values) keyed by linkId
            choices: Optional choices offered by the renderer, keyed by linkId;
                     choice items not listed here use the Questionnaire's answerOption

        Returns:
            QuestionnaireResponse with status in-progress

        Raises:
            UnknownAnswerChoiceError: If a choice answer matches no offered choice
            InvalidChoiceMetadataError: If the matched choice cannot say how to type the answer
        """
        choices = choices or {}
        items = []
        for q_item in self.questionnaire.get("item") or []:
            link_id = q_item.get("linkId")
            if link_id not in answers:
                continue

            values = answers[link_id]
            if not isinstance(values, list):
                values = [values]

            if q_item.get("type") == QuestionnaireItemType.CHOICE.value:
                offered = self._offered_choices(q_item, choices.get(link_id))
                answer = [_choice_answer(link_id, value, offered) for value in values]
            else:
                kind = _answer_kind(q_item)
                answer = [AnswerValue(kind=kind, value=value) for value in values]

            items.append(ResponseItem(link_id=link_id, answer=answer))

        logger.debug(
            "Built questionnaire response",
            questionnaire=self.questionnaire.get("url"),
            answered_items=len(items),
            ignored_answers=len(answers) - len(items),
        )
        return QuestionnaireResponse(
            questionnaire=self.questionnaire.get("url"),
            authored=current_local_timestamp(),
            item=items,
        )

    def _offered_choices(
        self,
        q_item: dict[str, Any],
        supplied: Sequence[AnswerChoice | dict[str, Any]] | None,
    ) -> list[AnswerChoice]:
        if supplied is None:
            return extract_answers(q_item) or []

        offered = []
        for choice in supplied:
            try:
                offered.append(AnswerChoice.model_validate(choice))
            except ValidationError as e:
                raise InvalidChoiceMetadataError(
                    q_item.get("linkId"), f"malformed choice ({e.error_count()} errors)", choice
                ) from e
        return offered


def _choice_answer(link_id: str, value: Any, offered: list[AnswerChoice]) -> AnswerValue:
    """Re-type a submitted choice literal using the choice it was picked from."""
    match = next((choice for choice in offered if choice.value == value), None)
    if match is None:
        raise UnknownAnswerChoiceError(link_id, value)

    kind = match.value_type
    if kind is None and match.value_coding is not None:
        kind = AnswerValueKind.CODING
    if kind is None:
        raise InvalidChoiceMetadataError(link_id, "choice declares no valueType", _dump(match))

    if kind is AnswerValueKind.CODING:
        if match.value_coding is None:
            raise InvalidChoiceMetadataError(
                link_id, "valueCoding choice carries no coding", _dump(match)
            )
        return AnswerValue(kind=kind, value=match.value_coding)
    return AnswerValue(kind=kind, value=value)


def _dump(choice: AnswerChoice) -> dict[str, Any]:
    return choice.model_dump(mode="json", by_alias=True, exclude_none=True)


def _answer_kind(q_item: dict[str, Any]) -> AnswerValueKind:
    item_type = q_item.get("type") or ""
    try:
        return AnswerValueKind.for_item_type(item_type)
    except ValueError:
        raise UnsupportedItemTypeError(item_type, link_id=q_item.get("linkId")) from None


def convert_responses(
    questionnaire: dict[str, Any],
    answers: Mapping[str, Any],
    choices: ChoiceMetadata | None = None,
) -> QuestionnaireResponse:
    """Convert answers for a Questionnaire into a QuestionnaireResponse."""
    return ResponseTransformer(questionnaire).transform(answers, choices)
