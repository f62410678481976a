"""
FHIR Questionnaire to form definition transformer.

This module converts FHIR Questionnaire resources into the renderer-agnostic
form definition document: one form element per item, plus a flat list of
calculated values that the external expression evaluator will supply.
"""

from typing import Any

from formbridge.config.logging import get_logger
from formbridge.constants import (
    CALCULATED_EXPRESSION_URL,
    CALCULATED_VALUE_URL,
    CQL_LANGUAGE,
    ENTRY_MODE_URL,
    QUESTIONNAIRE_RESOURCE_TYPE,
    RENDERING_XHTML_URL,
    SDC_QUESTIONNAIRE_PROFILE,
    evaluator_call,
)
from formbridge.errors import InvalidEntryModeError, InvalidResourceTypeError
from formbridge.models.form import (
    CalculatedValue,
    ControlType,
    EntryMode,
    FormDefinition,
    FormElement,
    FormPage,
)
from formbridge.transformers.answers import extract_answers
from formbridge.transformers.extensions import (
    find_expression,
    find_extension,
    find_extensions,
    text_extensions,
)
from formbridge.transformers.type_map import map_control_type, map_input_type
from formbridge.transformers.visibility import compile_visibility

logger = get_logger(__name__)


class QuestionnaireTransformer:
    """
    Transforms FHIR Questionnaire resources into form definitions.

    The transformer holds configuration only; every call builds its output
    from scratch and leaves the input untouched.
    """

    def __init__(
        self,
        default_entry_mode: EntryMode = EntryMode.PRIOR_EDIT,
        expression_language: str = CQL_LANGUAGE,
    ):
        """
        Initialize the transformer.

        Args:
            default_entry_mode: Entry mode used when the Questionnaire declares none
            expression_language: The only language accepted for SDC expressions
        """
        self.default_entry_mode = EntryMode(default_entry_mode)
        self.expression_language = expression_language

    def transform(self, questionnaire: dict[str, Any]) -> FormDefinition:
        """
        Transform a FHIR Questionnaire into a form definition.

        Args:
            questionnaire: FHIR Questionnaire resource

        Returns:
            FormDefinition with one page (or question) per root item

        Raises:
            ConversionError: If any part of the Questionnaire cannot be converted
        """
        resource_type = questionnaire.get("resourceType")
        if resource_type != QUESTIONNAIRE_RESOURCE_TYPE:
            raise InvalidResourceTypeError(resource_type)

        entry_mode = self.get_entry_mode(questionnaire)
        logger.debug(
            "Transforming questionnaire",
            questionnaire_id=questionnaire.get("id"),
            entry_mode=entry_mode.value,
            sdc_profile=_uses_sdc_profile(questionnaire),
        )

        elements: list[FormElement] = []
        calculated_values: list[CalculatedValue] = []
        for item in questionnaire.get("item") or []:
            element, item_values = self.convert_item(item)
            elements.append(element)
            calculated_values.extend(item_values)

        if entry_mode is EntryMode.RANDOM:
            definition = FormDefinition(questions=elements, calculated_values=calculated_values)
        else:
            pages = [FormPage(questions=[element]) for element in elements]
            if entry_mode is EntryMode.SEQUENTIAL:
                # Answers cannot be revisited in sequential mode
                definition = FormDefinition(
                    pages=pages,
                    go_next_page_automatic=True,
                    show_navigation_buttons=False,
                    calculated_values=calculated_values,
                )
            else:
                definition = FormDefinition(pages=pages, calculated_values=calculated_values)

        logger.debug(
            "Transformed questionnaire",
            questionnaire_id=questionnaire.get("id"),
            root_items=len(elements),
            calculated_values=len(calculated_values),
        )
        return definition

    def get_entry_mode(self, questionnaire: dict[str, Any]) -> EntryMode:
        """Get the entry mode declared by the Questionnaire, or the default."""
        ext = find_extension(questionnaire.get("extension"), ENTRY_MODE_URL)
        if ext is None:
            return self.default_entry_mode

        code = ext.get("valueCode")
        try:
            return EntryMode(code)
        except ValueError:
            raise InvalidEntryModeError(code, supported=[mode.value for mode in EntryMode]) from None

    def convert_item(self, item: dict[str, Any]) -> tuple[FormElement, list[CalculatedValue]]:
        """
        Convert one Questionnaire item and its descendants.

        Args:
            item: FHIR Questionnaire item

        Returns:
            The form element and every calculated value its subtree references,
            already flattened
        """
        link_id = item.get("linkId")
        item_type = item.get("type")
        control_type = map_control_type(item_type, item.get("repeats", False), link_id=link_id)
        calculated_values: list[CalculatedValue] = []

        # Title, possibly built from calculated placeholders
        title = item.get("text")
        extensions = text_extensions(item)
        placeholders = [
            ext.get("valueString")
            for ext in find_extensions(extensions, CALCULATED_VALUE_URL)
        ]
        if placeholders:
            title = " ".join(f"{{{name}}}" for name in placeholders)
            calculated_values.extend(
                CalculatedValue(name=name, expression=evaluator_call(name)) for name in placeholders
            )

        html = "".join(
            ext.get("valueString", "") for ext in find_extensions(extensions, RENDERING_XHTML_URL)
        )
        if not html and control_type is ControlType.HTML:
            html = item.get("text") or ""

        # Visibility; required items with a condition become conditionally required
        visibility = compile_visibility(item, self.expression_language)
        calculated_values.extend(visibility.calculated_values)
        condition = visibility.condition or None
        required = bool(item.get("required"))

        # The item's own value may be computed
        expression = find_expression(
            item.get("extension"), CALCULATED_EXPRESSION_URL, self.expression_language
        )
        if expression is not None:
            control_type = ControlType.EXPRESSION
            calculated_values.append(
                CalculatedValue(name=expression, expression=evaluator_call(expression))
            )

        children = None
        if item.get("item"):
            children = []
            for child in item["item"]:
                child_element, child_values = self.convert_item(child)
                children.append(child_element)
                calculated_values.extend(child_values)

        element = FormElement(
            name=link_id,
            type=control_type,
            input_type=map_input_type(item_type),
            title=title,
            html=html or None,
            visible_if=condition,
            required_if=condition if required else None,
            is_required=True if required and not condition else None,
            choices=extract_answers(item),
            elements=children,
            expression=evaluator_call(expression) if expression is not None else None,
        )
        return element, calculated_values


def _uses_sdc_profile(questionnaire: dict[str, Any]) -> bool:
    """Whether the Questionnaire claims conformance to the SDC profile."""
    profiles = (questionnaire.get("meta") or {}).get("profile") or []
    return any(str(profile).startswith(SDC_QUESTIONNAIRE_PROFILE) for profile in profiles)


def convert_from_fhir(questionnaire: dict[str, Any]) -> FormDefinition:
    """Convert a Questionnaire with the default transformer settings."""
    return QuestionnaireTransformer().transform(questionnaire)
