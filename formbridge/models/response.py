"""
Pydantic models for the FHIR QuestionnaireResponse produced from form answers.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

from formbridge.constants import (
    QUESTIONNAIRE_RESPONSE_RESOURCE_TYPE,
    RESPONSE_STATUS_IN_PROGRESS,
)
from formbridge.models.questionnaire import AnswerValueKind, Coding


class AnswerValue(BaseModel):
    """
    A single typed answer.

    Serializes to a one-key record such as ``{"valueString": "x"}`` or
    ``{"valueCoding": {"code": ..., "system": ..., "display": ...}}``.
    """

    kind: AnswerValueKind
    value: Any

    @model_validator(mode="after")
    def check_coding(self) -> "AnswerValue":
        """Coded answers must carry a Coding, and only coded answers may."""
        is_coding = isinstance(self.value, Coding)
        if (self.kind is AnswerValueKind.CODING) != is_coding:
            raise ValueError(f"{self.kind.value} answer cannot hold {type(self.value).__name__}")
        return self

    @model_serializer
    def serialize(self) -> dict[str, Any]:
        value = self.value
        if isinstance(value, Coding):
            value = value.model_dump(exclude_none=True)
        return {self.kind.value: value}


class ResponseItem(BaseModel):
    """Answers given for one Questionnaire item."""

    model_config = ConfigDict(populate_by_name=True)

    link_id: str = Field(alias="linkId")
    answer: list[AnswerValue] = Field(default_factory=list)


class QuestionnaireResponse(BaseModel):
    """FHIR QuestionnaireResponse resource."""

    model_config = ConfigDict(populate_by_name=True)

    resource_type: Literal["QuestionnaireResponse"] = Field(
        default=QUESTIONNAIRE_RESPONSE_RESOURCE_TYPE, alias="resourceType"
    )
    questionnaire: str | None = Field(default=None, description="Canonical URL answered")
    status: str = Field(default=RESPONSE_STATUS_IN_PROGRESS)
    authored: str = Field(description="Local date/time the answers were gathered")
    item: list[ResponseItem] = Field(default_factory=list)

    def to_fhir(self) -> dict[str, Any]:
        """Serialize to FHIR JSON."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
