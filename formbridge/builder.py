"""
Prepare converted Questionnaires for an external form renderer.

The renderer needs three things besides the form definition: the custom
``ordinalValue`` property on answer choices, the expression evaluator
registered under the name the definition calls, and an optional theme.
They are handed over together in a RenderConfig instead of being
registered on shared renderer state.
"""

from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from formbridge.config.logging import get_logger
from formbridge.config.settings import Settings, get_settings
from formbridge.constants import EVALUATOR_FUNCTION_NAME, ORDINAL_VALUE_PROPERTY
from formbridge.errors import MissingEvaluatorError
from formbridge.models.form import FormDefinition
from formbridge.transformers.questionnaire import QuestionnaireTransformer
from formbridge.transformers.response import ResponseTransformer

logger = get_logger(__name__)


class ExpressionEvaluator(Protocol):
    """Evaluates a named expression on behalf of the renderer."""

    def __call__(self, expression_name: str) -> Any: ...


class RenderConfig(BaseModel):
    """Everything the renderer needs to build a form model."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    definition: FormDefinition = Field(description="Converted form definition")
    custom_properties: list[tuple[str, str]] = Field(
        default_factory=list, description="(class, property spec) pairs to register"
    )
    functions: dict[str, Any] = Field(
        default_factory=dict, description="Functions to register, keyed by call name"
    )
    theme: str | None = Field(default=None, description="Renderer theme name")


class FormBuilder:
    """Converts Questionnaires and checks them against the available evaluator."""

    def __init__(
        self,
        evaluator: ExpressionEvaluator | None = None,
        theme: str | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the builder.

        Args:
            evaluator: Callable that evaluates expressions by name; required
                       whenever a Questionnaire uses calculated values
            theme: Optional renderer theme name
            settings: Settings to read conversion defaults from
        """
        settings = settings or get_settings()
        self.evaluator = evaluator
        self.theme = theme
        self.transformer = QuestionnaireTransformer(
            default_entry_mode=settings.default_entry_mode,
            expression_language=settings.expression_language,
        )

    def build(self, questionnaire: dict[str, Any]) -> RenderConfig:
        """
        Convert a Questionnaire and package it for the renderer.

        Raises:
            ConversionError: If the Questionnaire cannot be converted
            MissingEvaluatorError: If calculated values need an evaluator and none was given
        """
        definition = self.transformer.transform(questionnaire)

        call_prefix = f"{EVALUATOR_FUNCTION_NAME}("
        unresolved = [
            calc.name for calc in definition.calculated_values if call_prefix in calc.expression
        ]
        if unresolved and self.evaluator is None:
            raise MissingEvaluatorError(unresolved, function_name=EVALUATOR_FUNCTION_NAME)

        functions = {}
        if self.evaluator is not None:
            functions[EVALUATOR_FUNCTION_NAME] = self.evaluator

        logger.info(
            "Built form",
            questionnaire_id=questionnaire.get("id"),
            calculated_values=len(definition.calculated_values),
            evaluator=self.evaluator is not None,
            theme=self.theme,
        )
        return RenderConfig(
            definition=definition,
            custom_properties=[ORDINAL_VALUE_PROPERTY],
            functions=functions,
            theme=self.theme,
        )

    def responser(self, questionnaire: dict[str, Any]) -> ResponseTransformer:
        """Get a response transformer bound to a Questionnaire."""
        return ResponseTransformer(questionnaire)
