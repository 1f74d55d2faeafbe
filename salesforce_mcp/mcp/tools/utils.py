"""Utility functions for MCP tools - error remediation and response size checks"""
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from salesforce_mcp.errors import UpstreamFailure

logger = logging.getLogger(__name__)

# Token limits
TOKEN_LIMIT = 25000
TOKEN_WARNING_THRESHOLD = 20000  # 80% of limit

ErrorPatterns = Mapping[str, Dict[str, Any]]

# Remediation for SOSL failures, matched on the Salesforce error code in the message
SEARCH_ERROR_PATTERNS: ErrorPatterns = {
    "MALFORMED_SEARCH": {
        "hint": "Invalid search query format. Common issues:",
        "suggestions": [
            "Search term contains invalid characters",
            "Object or field names are incorrect",
            "Missing required SOSL syntax elements",
            "Invalid WITH clause combination",
        ],
    },
    "INVALID_FIELD": {
        "hint": "Invalid field specified in RETURNING clause. Please check:",
        "suggestions": [
            "Field names are correct",
            "Fields exist on the specified objects",
            "You have access to all specified fields",
            "WITH SNIPPET fields are valid",
        ],
    },
    "WITH_CLAUSE": {
        "hint": "Error in WITH clause. Please check:",
        "suggestions": [
            "WITH clause type is supported",
            "WITH clause value is valid",
            "You have permission to use the specified WITH clause",
        ],
    },
}

# Remediation for Metadata API failures on objects and fields
METADATA_ERROR_PATTERNS: ErrorPatterns = {
    "INVALID_CROSS_REFERENCE_KEY": {
        "hint": "A referenced object or field could not be resolved. Please check:",
        "suggestions": [
            "referenceTo names an existing object (custom objects end in __c)",
            "The object you are modifying exists in this org",
            "Related metadata was deployed before this change",
        ],
    },
    "INSUFFICIENT_ACCESS": {
        "hint": "You don't have permission to change this metadata. Please check:",
        "suggestions": [
            "Your user has the Customize Application permission",
            "The object is not managed by an installed package",
            "Contact your Salesforce administrator",
        ],
    },
    "INVALID_TYPE": {
        "hint": "The metadata type or field type is not valid here. Please check:",
        "suggestions": [
            "The field type is supported on this object",
            "The object API name is spelled correctly",
            "Type-specific settings (length, precision, referenceTo) match the field type",
        ],
    },
}


def remediation_text(hint: str, suggestions: List[str]) -> str:
    """Render a hint followed by a numbered checklist."""
    lines = [hint]
    lines.extend(f"{i}. {suggestion}" for i, suggestion in enumerate(suggestions, start=1))
    return "\n".join(lines)


def enhance_error(error_msg: str, patterns: ErrorPatterns) -> str:
    """Prefix a remote error with remediation guidance when its code is recognised.

    Args:
        error_msg: Original error message from Salesforce
        patterns: Error code -> {"hint", "suggestions"} table

    Returns:
        Guidance followed by the original error, or the original error unchanged
    """
    for error_code, info in patterns.items():
        if error_code in error_msg:
            guide = remediation_text(info["hint"], info["suggestions"])
            return f"{guide}\n\nOriginal error: {error_msg}"
    return error_msg


def format_metadata_error(
    result: Optional[Union[Dict[str, Any], List[Dict[str, Any]]]],
    operation: str
) -> str:
    """Describe an unsuccessful Metadata API save result.

    Args:
        result: Save result (or list of them; only the first is reported)
        operation: What was attempted, e.g. "create custom object Feedback__c"
    """
    message = f"Failed to {operation}"
    save_result = result[0] if isinstance(result, list) and result else result
    if not isinstance(save_result, Mapping):
        return message

    errors = save_result.get("errors")
    if not errors:
        return message

    if isinstance(errors, list):
        message += ": " + ", ".join(str(e.get("message", e)) if isinstance(e, Mapping) else str(e) for e in errors)
    elif isinstance(errors, Mapping):
        message += f": {errors.get('message')}"
        if errors.get("fields"):
            fields = errors["fields"]
            message += f" (Field: {', '.join(fields) if isinstance(fields, list) else fields})"
        if errors.get("statusCode"):
            message += f" [{errors['statusCode']}]"
    else:
        message += f": {errors}"

    return message
def call_metadata_api(action: str, kind: str, target: str, func: Callable[..., Any], *args: Any) -> Any:
    """Run a Metadata API call, turning remote failures into UpstreamFailure.

    Args:
        action: "creating", "reading" or "updating"
        kind: "object" or "field", used in the error message
        target: Name of the affected object or field, e.g. "Feedback__c"
        func: Capability method to call
    """
    try:
        return func(*args)
    except Exception as e:
        logger.error("Metadata API call failed while %s custom %s %s: %s", action, kind, target, e)
        raise UpstreamFailure(
            f"Error {action} custom {kind} {target}: {enhance_error(str(e), METADATA_ERROR_PATTERNS)}"
        ) from e
