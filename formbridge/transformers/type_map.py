"""
Lookup tables from Questionnaire item types to form controls.
"""

from formbridge.errors import UnsupportedItemTypeError
from formbridge.models.form import ControlType, InputType

# Item type -> control type; choice is resolved separately from the repeats flag
CONTROL_TYPES: dict[str, ControlType] = {
    "boolean": ControlType.BOOLEAN,
    "date": ControlType.TEXT,
    "dateTime": ControlType.TEXT,
    "decimal": ControlType.TEXT,
    "display": ControlType.HTML,
    "group": ControlType.PANEL,
    "integer": ControlType.TEXT,
    "string": ControlType.TEXT,
    "text": ControlType.COMMENT,
    "time": ControlType.TEXT,
    "url": ControlType.TEXT,
}

INPUT_TYPES: dict[str, InputType] = {
    "date": InputType.DATE,
    "dateTime": InputType.DATETIME_LOCAL,
    "decimal": InputType.TEXT,
    "integer": InputType.NUMBER,
    "string": InputType.TEXT,
    "time": InputType.TIME,
    "url": InputType.URL,
}


def map_control_type(item_type: str, repeats: bool = False, link_id: str | None = None) -> ControlType:
    """
    Map a Questionnaire item type to a form control type.

    Args:
        item_type: FHIR item type code
        repeats: Whether the item allows multiple answers
        link_id: Item linkId, used for error reporting only

    Returns:
        The control type

    Raises:
        UnsupportedItemTypeError: If the item type has no control
    """
    if item_type == "choice":
        return ControlType.CHECKBOX if repeats else ControlType.RADIO_GROUP
    try:
        return CONTROL_TYPES[item_type]
    except (KeyError, TypeError):
        raise UnsupportedItemTypeError(item_type, link_id=link_id) from None


def map_input_type(item_type: str) -> InputType | None:
    """Get the input hint for an item type, or None if it has none."""
    return INPUT_TYPES.get(item_type)
