"""
formbridge - FHIR Questionnaire <-> form definition converters.
"""

__version__ = "0.1.0"

from formbridge.builder import FormBuilder, RenderConfig  # noqa: E402
from formbridge.transformers import (  # noqa: E402
    QuestionnaireTransformer,
    ResponseTransformer,
    convert_from_fhir,
    convert_responses,
)

__all__ = [
    "FormBuilder",
    "QuestionnaireTransformer",
    "RenderConfig",
    "ResponseTransformer",
    "convert_from_fhir",
    "convert_responses",
]
