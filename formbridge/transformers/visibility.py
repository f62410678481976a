"""
Compile enableWhen conditions and enableWhenExpression into visibility expressions.
"""

from typing import Any, NamedTuple

from formbridge.constants import CQL_LANGUAGE, ENABLE_WHEN_EXPRESSION_URL, evaluator_call
from formbridge.errors import InvalidEnableWhenError, MissingCodingDisplayError
from formbridge.models.form import CalculatedValue
from formbridge.models.questionnaire import EnableBehavior
from formbridge.transformers.extensions import find_expression

# enableWhen operators defined by FHIR R4
OPERATORS = frozenset({"exists", "=", "!=", ">", "<", ">=", "<="})


class Visibility(NamedTuple):
    """Boolean expression for an item plus the calculated values it references."""

    condition: str
    calculated_values: list[CalculatedValue]


def compile_visibility(item: dict[str, Any], language: str = CQL_LANGUAGE) -> Visibility:
    """
    Build the visibility expression for a Questionnaire item.

    An enableWhenExpression extension takes precedence over enableWhen
    conditions; the two are never combined.

    Args:
        item: FHIR Questionnaire item
        language: Accepted expression language

    Returns:
        Visibility with an empty condition when the item is always shown
    """
    expression = find_expression(item.get("extension"), ENABLE_WHEN_EXPRESSION_URL, language)
    if expression is not None:
        return Visibility(
            condition=f"{{{expression}}} == true",
            calculated_values=[
                CalculatedValue(name=expression, expression=evaluator_call(expression))
            ],
        )

    conditions = item.get("enableWhen")
    if not conditions:
        return Visibility(condition="", calculated_values=[])
    if isinstance(conditions, dict):
        conditions = [conditions]

    # all -> and, anything else (any) -> or
    behavior = item.get("enableBehavior", EnableBehavior.ALL.value)
    joiner = " and " if behavior == EnableBehavior.ALL.value else " or "
    rendered = [_render_condition(cond, item.get("linkId")) for cond in conditions]
    return Visibility(condition=joiner.join(rendered), calculated_values=[])


def _render_condition(condition: dict[str, Any], link_id: str | None) -> str:
    """Render one enableWhen condition."""
    question = condition.get("question")
    operator = condition.get("operator")
    if not question:
        raise InvalidEnableWhenError(condition, "missing question", link_id=link_id)
    if operator not in OPERATORS:
        raise InvalidEnableWhenError(
            condition, f"unsupported operator {operator!r}", link_id=link_id
        )

    if operator == "exists":
        return f"{{{question}}} != undefined"

    answer_keys = [key for key in condition if key.startswith("answer")]
    if len(answer_keys) != 1:
        raise InvalidEnableWhenError(
            condition,
            f"expected exactly one answer[x], found {len(answer_keys)}",
            link_id=link_id,
        )

    key = answer_keys[0]
    answer = condition[key]
    if key == "answerCoding":
        if not isinstance(answer, dict) or not answer.get("display"):
            raise MissingCodingDisplayError(answer, link_id=link_id)
        comparand = answer["display"]
    elif isinstance(answer, (dict, list)):
        # Only scalar literals can be quoted into the condition
        raise InvalidEnableWhenError(condition, f"unsupported comparand {key}", link_id=link_id)
    else:
        comparand = _literal(answer)

    return f"{{{question}}} {operator} '{comparand}'"


def _literal(value: Any) -> str:
    """Render an answer literal the way the expression language spells it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
