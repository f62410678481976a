"""
Pydantic models for formbridge.

This module contains models for:
- the source Questionnaire vocabulary
- the form definition document
- the QuestionnaireResponse resource
"""

from formbridge.models.form import (
    AnswerChoice,
    CalculatedValue,
    ControlType,
    EntryMode,
    FormDefinition,
    FormElement,
    FormPage,
    InputType,
)
from formbridge.models.questionnaire import (
    AnswerValueKind,
    Coding,
    EnableBehavior,
    QuestionnaireItemType,
)
from formbridge.models.response import AnswerValue, QuestionnaireResponse, ResponseItem

__all__ = [
    "AnswerChoice",
    "AnswerValue",
    "AnswerValueKind",
    "CalculatedValue",
    "Coding",
    "ControlType",
    "EnableBehavior",
    "EntryMode",
    "FormDefinition",
    "FormElement",
    "FormPage",
    "InputType",
    "QuestionnaireItemType",
    "QuestionnaireResponse",
    "ResponseItem",
]
