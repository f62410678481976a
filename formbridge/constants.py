"""
Structure definition URLs and fixed strings used by the converters.

These values are intentionally not configurable via environment variables.
"""

# SDC Questionnaire profile and extensions
SDC_QUESTIONNAIRE_PROFILE = "http://hl7.org/fhir/uv/sdc/StructureDefinition/sdc-questionnaire"
ENTRY_MODE_URL = "http://hl7.org/fhir/uv/sdc/StructureDefinition/sdc-questionnaire-entryMode"
CALCULATED_EXPRESSION_URL = (
    "http://hl7.org/fhir/uv/sdc/StructureDefinition/sdc-questionnaire-calculatedExpression"
)
ENABLE_WHEN_EXPRESSION_URL = (
    "http://hl7.org/fhir/uv/sdc/StructureDefinition/sdc-questionnaire-enableWhenExpression"
)

# Core FHIR extensions
ORDINAL_VALUE_URL = "http://hl7.org/fhir/StructureDefinition/ordinalValue"
RENDERING_XHTML_URL = "http://hl7.org/fhir/StructureDefinition/rendering-xhtml"
CALCULATED_VALUE_URL = "http://hl7.org/fhir/StructureDefinition/cqf-calculatedValue"

# Expressions
CQL_LANGUAGE = "text/cql"
EVALUATOR_FUNCTION_NAME = "evaluateExpression"

# Resource types
QUESTIONNAIRE_RESOURCE_TYPE = "Questionnaire"
QUESTIONNAIRE_RESPONSE_RESOURCE_TYPE = "QuestionnaireResponse"
RESPONSE_STATUS_IN_PROGRESS = "in-progress"

# Custom property the renderer must register on answer choices
ORDINAL_VALUE_PROPERTY = ("itemvalue", "ordinalValue:number")


def evaluator_call(expression: str) -> str:
    """Build the placeholder call-site string for an external expression."""
    return f"{EVALUATOR_FUNCTION_NAME}('{expression}')"
