"""
Extract answer choices from Questionnaire items.
"""

from typing import Any

from formbridge.constants import ORDINAL_VALUE_URL
from formbridge.errors import (
    InvalidOrdinalValueError,
    MissingCodingDisplayError,
    UnsupportedAnswerKindError,
    UnsupportedAnswerValueSetError,
)
from formbridge.models.form import AnswerChoice
from formbridge.models.questionnaire import AnswerValueKind, Coding
from formbridge.transformers.extensions import find_extensions

# answerOption value[x] keys, in the order they are tried
ANSWER_KINDS: tuple[AnswerValueKind, ...] = (
    AnswerValueKind.INTEGER,
    AnswerValueKind.DATE,
    AnswerValueKind.TIME,
    AnswerValueKind.STRING,
    AnswerValueKind.CODING,
)


def extract_answers(item: dict[str, Any]) -> list[AnswerChoice] | None:
    """
    Convert an item's answerOption list into answer choices.

    Args:
        item: FHIR Questionnaire item

    Returns:
        Choices in source order, or None if the item offers no options

    Raises:
        UnsupportedAnswerValueSetError: If the item uses answerValueSet
        UnsupportedAnswerKindError: If an option uses an unsupported value[x]
        MissingCodingDisplayError: If a coded option has no display
    """
    link_id = item.get("linkId")
    if item.get("answerValueSet"):
        raise UnsupportedAnswerValueSetError(item["answerValueSet"], link_id=link_id)

    options = item.get("answerOption")
    if options is None:
        return None

    return [_extract_choice(option, link_id) for option in options]


def _extract_choice(option: dict[str, Any], link_id: str | None) -> AnswerChoice:
    kind = next((kind for kind in ANSWER_KINDS if kind.value in option), None)
    if kind is None:
        keys = [key for key in option if key.startswith("value")]
        raise UnsupportedAnswerKindError(keys, link_id=link_id)

    coding = None
    if kind is AnswerValueKind.CODING:
        coding = Coding.model_validate(option[kind.value])
        if not coding.display:
            raise MissingCodingDisplayError(option[kind.value], link_id=link_id)
        value = coding.display
    else:
        value = option[kind.value]

    return AnswerChoice(
        value=value,
        text=str(value),
        ordinal_value=get_ordinal_value(option, link_id),
        value_type=kind,
        value_coding=coding,
    )


def get_ordinal_value(option: dict[str, Any], link_id: str | None = None) -> float:
    """
    Get the ordinalValue extension of an answer option.

    Options without the extension rank 0.

    Raises:
        InvalidOrdinalValueError: If the extension is present without a numeric valueDecimal
    """
    extensions = find_extensions(option.get("extension"), ORDINAL_VALUE_URL)
    if not extensions:
        return 0
    value = extensions[0].get("valueDecimal")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidOrdinalValueError(extensions[0], link_id=link_id)
    return value
