"""
Custom error types for formbridge.

Every conversion failure is typed and fatal to the current call; nothing
is downgraded to a default value.
"""

from typing import Any


class FormBridgeError(Exception):
    """Base exception for all formbridge errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# Conversion Errors


class ConversionError(FormBridgeError):
    """Base exception for Questionnaire and response conversion errors."""

    pass


class InvalidResourceTypeError(ConversionError):
    """Raised when the input is not a Questionnaire resource."""

    def __init__(self, resource_type: str | None, expected: str = "Questionnaire"):
        self.resource_type = resource_type
        self.expected = expected
        message = f"Only FHIR {expected} resources are supported (got: {resource_type})"
        super().__init__(
            message,
            details={"resource_type": resource_type, "expected": expected},
        )


class InvalidEntryModeError(ConversionError):
    """Raised when the entry mode extension carries an unrecognized code."""

    def __init__(self, entry_mode: Any, supported: list[str]):
        self.entry_mode = entry_mode
        self.supported = supported
        message = (
            f"sdc-questionnaire-entryMode extension does not specify a supported "
            f"entry mode: {entry_mode}"
        )
        super().__init__(
            message,
            details={"entry_mode": entry_mode, "supported": supported},
        )


class UnsupportedItemTypeError(ConversionError):
    """Raised when an item type has no form control counterpart."""

    def __init__(self, item_type: Any, link_id: str | None = None):
        self.item_type = item_type
        self.link_id = link_id
        message = f"Unsupported item type: {item_type}"
        if link_id:
            message += f" (linkId: {link_id})"
        super().__init__(
            message,
            details={"item_type": item_type, "link_id": link_id},
        )


class UnsupportedAnswerValueSetError(ConversionError):
    """Raised when an item references an answer value set instead of options."""

    def __init__(self, value_set: str, link_id: str | None = None):
        self.value_set = value_set
        self.link_id = link_id
        message = f"Answer value sets are not currently supported: {value_set}"
        super().__init__(
            message,
            details={"value_set": value_set, "link_id": link_id},
        )


class UnsupportedAnswerKindError(ConversionError):
    """Raised when an answer option uses an unrecognized value[x]."""

    def __init__(self, keys: list[str], link_id: str | None = None):
        self.keys = keys
        self.link_id = link_id
        message = f"Unsupported value[x] in an answerOption: {', '.join(keys) or 'none'}"
        super().__init__(
            message,
            details={"keys": keys, "link_id": link_id},
        )


class MissingCodingDisplayError(ConversionError):
    """Raised when a coded answer has no display text."""

    def __init__(self, coding: dict[str, Any], link_id: str | None = None):
        self.coding = coding
        self.link_id = link_id
        message = "Answer valueCoding with no display property"
        if coding.get("code"):
            message += f" (code: {coding['code']})"
        super().__init__(
            message,
            details={"coding": coding, "link_id": link_id},
        )


class UnsupportedExpressionLanguageError(ConversionError):
    """Raised when an expression extension is not written in the supported language."""

    def __init__(self, extension: str, language: str | None, supported: str):
        self.extension = extension
        self.language = language
        self.supported = supported
        message = (
            f"{extension} extension does not specify a supported language "
            f"(got: {language}, supported: {supported})"
        )
        super().__init__(
            message,
            details={"extension": extension, "language": language, "supported": supported},
        )


class DuplicateExtensionError(ConversionError):
    """Raised when an extension that may appear at most once appears several times."""

    def __init__(self, url: str, count: int):
        self.url = url
        self.count = count
        message = f"Only one {url.rsplit('/', 1)[-1]} extension allowed, found {count}"
        super().__init__(message, details={"url": url, "count": count})


class MultipleExpressionsNotAllowedError(DuplicateExtensionError):
    """Raised when an item carries more than one expression of the same kind."""

    pass


class InvalidEnableWhenError(ConversionError):
    """Raised when an enableWhen condition cannot be compiled."""

    def __init__(self, condition: dict[str, Any], reason: str, link_id: str | None = None):
        self.condition = condition
        self.link_id = link_id
        message = f"Invalid enableWhen condition: {reason}"
        super().__init__(
            message,
            details={"condition": condition, "reason": reason, "link_id": link_id},
        )


class UnknownAnswerChoiceError(ConversionError):
    """Raised when a submitted choice value matches none of the offered choices."""

    def __init__(self, link_id: str, value: Any):
        self.link_id = link_id
        self.value = value
        message = f"Answer '{value}' does not match any choice offered for item {link_id}"
        super().__init__(message, details={"link_id": link_id, "value": value})


class InvalidChoiceMetadataError(ConversionError):
    """Raised when renderer-supplied choices cannot type an answer."""

    def __init__(self, link_id: str, reason: str, choice: Any = None):
        self.link_id = link_id
        self.reason = reason
        message = f"Invalid choice metadata for item {link_id}: {reason}"
        super().__init__(
            message,
            details={"link_id": link_id, "reason": reason, "choice": choice},
        )


class InvalidOrdinalValueError(ConversionError):
    """Raised when an ordinalValue extension carries no numeric valueDecimal."""

    def __init__(self, extension: dict[str, Any], link_id: str | None = None):
        self.extension = extension
        self.link_id = link_id
        message = f"ordinalValue extension has no numeric valueDecimal (linkId: {link_id})"
        super().__init__(message, details={"extension": extension, "link_id": link_id})


# Configuration Errors


class ConfigurationError(FormBridgeError):
    """Raised when there's a configuration error."""

    pass


class MissingEvaluatorError(ConfigurationError):
    """Raised when calculated values reference an evaluator that was not supplied."""

    def __init__(self, names: list[str], function_name: str = "evaluateExpression"):
        self.names = names
        self.function_name = function_name
        message = (
            f"Null-valued {function_name}() is referenced by at least one calculatedValue: "
            f"{', '.join(names)}"
        )
        super().__init__(
            message,
            details={"calculated_values": names, "function_name": function_name},
        )
