"""
Shared pytest fixtures for formbridge tests.
"""

import os
from typing import Any

import pytest

from tests.factories import (
    CALCULATED_EXPRESSION_URL,
    expression_extension,
    make_choice_item,
    make_questionnaire,
)

# Set test environment variables before importing formbridge modules
os.environ.setdefault("FORMBRIDGE_DEBUG", "true")
os.environ.setdefault("FORMBRIDGE_LOG_JSON", "false")


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings between tests to avoid state leakage."""
    from formbridge.config.settings import reset_settings

    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def questionnaire_one_question() -> dict[str, Any]:
    """Questionnaire with a single choice item."""
    return make_questionnaire([make_choice_item()])


@pytest.fixture
def questionnaire_multiple_questions() -> dict[str, Any]:
    """Questionnaire with choice, boolean and display items."""
    return make_questionnaire(
        [
            make_choice_item("1"),
            {"linkId": "2", "type": "boolean", "text": "Here is a boolean question"},
            {"linkId": "3", "type": "display", "text": "Here is a display only question"},
        ]
    )


@pytest.fixture
def questionnaire_nested_items() -> dict[str, Any]:
    """Questionnaire with a group holding two children."""
    return make_questionnaire(
        [
            {
                "linkId": "1",
                "type": "group",
                "text": "Here is a group question",
                "item": [
                    {"linkId": "2", "type": "boolean", "text": "Here is a boolean question"},
                    {"linkId": "3", "type": "display", "text": "Here is a display only question"},
                ],
            }
        ]
    )


@pytest.fixture
def questionnaire_calculated_expression() -> dict[str, Any]:
    """Questionnaire with one calculatedExpression nested two levels deep."""
    return make_questionnaire(
        [
            {
                "linkId": "1",
                "type": "group",
                "text": "Scores",
                "item": [
                    {
                        "linkId": "1.1",
                        "type": "group",
                        "text": "Totals",
                        "item": [
                            {
                                "linkId": "1.1.1",
                                "type": "integer",
                                "text": "Total score",
                                "extension": [
                                    expression_extension(CALCULATED_EXPRESSION_URL, "TotalScore")
                                ],
                            }
                        ],
                    }
                ],
            },
            {"linkId": "2", "type": "string", "text": "Comments"},
        ]
    )
