"""
Pydantic models for the renderer-agnostic form definition.

Field names are snake_case in Python and serialize to the camelCase keys
the form renderer expects (see ``FormModel.to_json``).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from formbridge.models.questionnaire import AnswerValueKind, Coding


class FormModel(BaseModel):
    """Base for form definition models."""

    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> dict[str, Any]:
        """Serialize to the renderer's JSON shape, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EntryMode(str, Enum):
    """SDC entry modes controlling how items are grouped for presentation."""

    SEQUENTIAL = "sequential"
    PRIOR_EDIT = "prior-edit"
    RANDOM = "random"


class ControlType(str, Enum):
    """Form control types."""

    BOOLEAN = "boolean"
    CHECKBOX = "checkbox"
    RADIO_GROUP = "radiogroup"
    TEXT = "text"
    COMMENT = "comment"
    HTML = "html"
    PANEL = "panel"
    EXPRESSION = "expression"


class InputType(str, Enum):
    """Browser input hints for free-text controls."""

    DATE = "date"
    DATETIME_LOCAL = "datetime-local"
    NUMBER = "number"
    TEXT = "text"
    TIME = "time"
    URL = "url"


class CalculatedValue(FormModel):
    """A named value computed by the external expression evaluator."""

    name: str = Field(description="Placeholder token, equal to the expression name")
    expression: str = Field(description="Call-site string for the external evaluator")


class AnswerChoice(FormModel):
    """A selectable answer for choice controls."""

    value: Any = Field(description="Answer literal (display text for coded answers)")
    text: str = Field(description="Text shown for the choice")
    ordinal_value: float = Field(
        default=0, alias="ordinalValue", description="Numeric rank used for scoring"
    )
    value_type: AnswerValueKind | None = Field(
        default=None, alias="valueType", description="Declared FHIR value[x] key"
    )
    value_coding: Coding | None = Field(
        default=None, alias="valueCoding", description="Coding for coded answers"
    )


class FormElement(FormModel):
    """A single form element converted from one Questionnaire item."""

    name: str = Field(description="Element name, equal to the item linkId")
    type: ControlType = Field(description="Control type")
    input_type: InputType | None = Field(default=None, alias="inputType")
    title: str | None = Field(default=None, description="Literal or placeholder title")
    html: str | None = Field(default=None, description="HTML markup for the element")
    visible_if: str | None = Field(default=None, alias="visibleIf")
    required_if: str | None = Field(default=None, alias="requiredIf")
    is_required: bool | None = Field(default=None, alias="isRequired")
    choices: list[AnswerChoice] | None = Field(default=None)
    elements: list["FormElement"] | None = Field(
        default=None, description="Child elements (panels only)"
    )
    expression: str | None = Field(
        default=None, description="Evaluator call when the element itself is computed"
    )


# Enable forward references for nested elements
FormElement.model_rebuild()


class FormPage(FormModel):
    """A page wrapping one root element."""

    questions: list[FormElement] = Field(default_factory=list)


class FormDefinition(FormModel):
    """Form definition document consumed by the renderer."""

    questions: list[FormElement] | None = Field(
        default=None, description="Flat question list (random entry mode)"
    )
    pages: list[FormPage] | None = Field(
        default=None, description="One page per root item (sequential, prior-edit)"
    )
    go_next_page_automatic: bool | None = Field(default=None, alias="goNextPageAutomatic")
    show_navigation_buttons: bool | None = Field(default=None, alias="showNavigationButtons")
    calculated_values: list[CalculatedValue] = Field(
        default_factory=list, alias="calculatedValues"
    )
