"""
Questionnaire transformers module.

This module provides the two converters between FHIR Questionnaire
resources and form definitions:
- Questionnaire -> form definition
- form answers -> QuestionnaireResponse
"""

from formbridge.transformers.questionnaire import QuestionnaireTransformer, convert_from_fhir
from formbridge.transformers.response import ResponseTransformer, convert_responses

__all__ = [
    "QuestionnaireTransformer",
    "ResponseTransformer",
    "convert_from_fhir",
    "convert_responses",
]
