"""
Form conversion REST API endpoints.

- POST /api/forms/definition - Convert a Questionnaire to a form definition
- POST /api/forms/response - Convert form answers to a QuestionnaireResponse
"""

from typing import Any

from fastapi import APIRouter, Body
from pydantic import BaseModel, Field

from formbridge.config.settings import get_settings
from formbridge.errors import FormBridgeError
from formbridge.models.form import AnswerChoice
from formbridge.routers.errors import handle_conversion_error
from formbridge.transformers.questionnaire import QuestionnaireTransformer
from formbridge.transformers.response import ResponseTransformer

router = APIRouter(prefix="/api/forms", tags=["forms"])


class ResponseRequest(BaseModel):
    """Request body for response conversion."""

    questionnaire: dict[str, Any] = Field(..., description="FHIR Questionnaire that was answered")
    answers: dict[str, Any] = Field(..., description="Submitted value(s) keyed by linkId")
    choices: dict[str, list[AnswerChoice]] | None = Field(
        default=None, description="Choices offered by the renderer, keyed by linkId"
    )


@router.post("/definition")
async def create_definition(
    questionnaire: dict[str, Any] = Body(..., description="FHIR Questionnaire resource"),
) -> dict[str, Any]:
    """
    Convert a FHIR Questionnaire into a form definition.

    Returns 422 with the error details if the Questionnaire uses
    unsupported features.
    """
    settings = get_settings()
    transformer = QuestionnaireTransformer(
        default_entry_mode=settings.default_entry_mode,
        expression_language=settings.expression_language,
    )
    try:
        definition = transformer.transform(questionnaire)
    except FormBridgeError as e:
        handle_conversion_error(e, operation="definition")
    return definition.to_json()


@router.post("/response")
async def create_response(request: ResponseRequest) -> dict[str, Any]:
    """Convert submitted form answers into a FHIR QuestionnaireResponse."""
    try:
        transformer = ResponseTransformer(request.questionnaire)
        response = transformer.transform(request.answers, request.choices)
    except FormBridgeError as e:
        handle_conversion_error(e, operation="response")
    return response.to_fhir()
