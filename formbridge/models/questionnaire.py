"""
Enums and shared types for the source FHIR Questionnaire shape.

Questionnaires themselves are read as plain FHIR JSON dicts; these types
name the closed sets of values the converters recognize.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class QuestionnaireItemType(str, Enum):
    """FHIR Questionnaire item types."""

    GROUP = "group"
    DISPLAY = "display"
    BOOLEAN = "boolean"
    DECIMAL = "decimal"
    INTEGER = "integer"
    DATE = "date"
    DATETIME = "dateTime"
    TIME = "time"
    STRING = "string"
    TEXT = "text"
    URL = "url"
    CHOICE = "choice"
    OPEN_CHOICE = "open-choice"
    ATTACHMENT = "attachment"
    REFERENCE = "reference"
    QUANTITY = "quantity"


class EnableBehavior(str, Enum):
    """How multiple enableWhen conditions combine."""

    ALL = "all"
    ANY = "any"


class AnswerValueKind(str, Enum):
    """
    FHIR value[x] keys an answer may be carried under.

    The member value is the JSON key used when the answer is serialized.
    """

    BOOLEAN = "valueBoolean"
    DECIMAL = "valueDecimal"
    INTEGER = "valueInteger"
    DATE = "valueDate"
    DATETIME = "valueDateTime"
    TIME = "valueTime"
    STRING = "valueString"
    TEXT = "valueText"
    URL = "valueUrl"
    CODING = "valueCoding"

    @classmethod
    def for_item_type(cls, item_type: str) -> "AnswerValueKind":
        """
        Get the answer kind for a non-choice item type.

        Raises:
            ValueError: If the item type has no answer kind (e.g. group, display)
        """
        return cls("value" + item_type[:1].upper() + item_type[1:])


class Coding(BaseModel):
    """A FHIR Coding triple."""

    model_config = ConfigDict(extra="ignore")

    code: str | None = Field(default=None, description="Symbol in the code system")
    system: str | None = Field(default=None, description="Identity of the code system")
    display: str | None = Field(default=None, description="Representation defined by the system")
