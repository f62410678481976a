"""
Helpers for searching FHIR extension lists.
"""

from typing import Any

from formbridge.errors import (
    DuplicateExtensionError,
    MultipleExpressionsNotAllowedError,
    UnsupportedExpressionLanguageError,
)


def find_extensions(
    extensions: list[dict[str, Any]] | None,
    url_prefix: str,
    at_most_one: bool = False,
    duplicate_error: type[DuplicateExtensionError] = DuplicateExtensionError,
) -> list[dict[str, Any]]:
    """
    Find the extensions whose url starts with a prefix.

    Args:
        extensions: Extension list (may be None)
        url_prefix: Structure definition URL to match
        at_most_one: If True, more than one match is an error
        duplicate_error: Error class raised when at_most_one is violated

    Returns:
        Matching extensions, in source order

    Raises:
        DuplicateExtensionError: If at_most_one is set and several extensions match
    """
    matches = [ext for ext in extensions or [] if str(ext.get("url", "")).startswith(url_prefix)]
    if at_most_one and len(matches) > 1:
        raise duplicate_error(url_prefix, len(matches))
    return matches


def find_extension(
    extensions: list[dict[str, Any]] | None,
    url_prefix: str,
    duplicate_error: type[DuplicateExtensionError] = DuplicateExtensionError,
) -> dict[str, Any] | None:
    """Find the single extension matching a prefix, or None if absent."""
    matches = find_extensions(
        extensions, url_prefix, at_most_one=True, duplicate_error=duplicate_error
    )
    return matches[0] if matches else None


def text_extensions(item: dict[str, Any]) -> list[dict[str, Any]]:
    """Get the extensions attached to an item's text primitive (``_text``)."""
    text_element = item.get("_text") or {}
    return text_element.get("extension") or []


def find_expression(
    extensions: list[dict[str, Any]] | None,
    url_prefix: str,
    language: str,
) -> str | None:
    """
    Get the expression text of an SDC expression extension.

    Args:
        extensions: Extension list to search
        url_prefix: Expression extension URL (calculatedExpression, enableWhenExpression)
        language: The only accepted expression language

    Returns:
        The expression text, or None if the extension is absent

    Raises:
        MultipleExpressionsNotAllowedError: If the extension appears more than once
        UnsupportedExpressionLanguageError: If the expression is missing or in another language
    """
    ext = find_extension(extensions, url_prefix, duplicate_error=MultipleExpressionsNotAllowedError)
    if ext is None:
        return None

    value = ext.get("valueExpression") or {}
    if value.get("language") != language or not value.get("expression"):
        raise UnsupportedExpressionLanguageError(
            url_prefix.rsplit("/", 1)[-1],
            value.get("language"),
            supported=language,
        )
    return value["expression"]
