"""SOQL query builder and query result formatting"""
import json
import logging
import re
from typing import Any, List, Mapping, Optional, Sequence

from salesforce_mcp.mcp.tools.utils import remediation_text
from salesforce_mcp.utils.validators import validate_relationship_fields

logger = logging.getLogger(__name__)

SUBQUERY_RELATIONSHIP = re.compile(r'FROM\s+(\w+)')
INVALID_FIELD_NAME = re.compile(r'(?:No such column |Invalid field: )[\'"]?([^\'")\s]+)')

RELATIONSHIP_CHECKLIST = [
    "The relationship name is correct",
    "The field exists on the related object",
    "You have access to the field",
    "For custom relationships, ensure you're using '__r' suffix",
]


def build_soql_query(
    object_name: str,
    fields: Sequence[str],
    where_clause: Optional[str] = None,
    order_by: Optional[str] = None,
    limit: Optional[int] = None
) -> str:
    """Build a SOQL query from components.

    Field expressions are validated before anything is assembled. Values are
    interpolated as given; callers are responsible for quoting literals in
    ``where_clause``.

    Args:
        object_name: Salesforce object API name
        fields: Plain fields, dotted parent paths or ``(SELECT ... FROM ...)`` sub-queries
        where_clause: WHERE condition (without WHERE keyword)
        order_by: ORDER BY field(s) (without ORDER BY keyword)
        limit: Maximum records to return

    Raises:
        InvalidRelationshipField: If a field expression is malformed
    """
    validate_relationship_fields(fields)

    query = f"SELECT {', '.join(fields)} FROM {object_name}"
    if where_clause:
        query += f" WHERE {where_clause}"
    if order_by:
        query += f" ORDER BY {order_by}"
    if limit:
        query += f" LIMIT {limit}"
    return query


def format_value(value: Any) -> str:
    """Render a scalar the way Salesforce serialises it in JSON."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def count_child_records(value: Any) -> int:
    """Number of child records in a sub-query result (list or ``{records: [...]}``)."""
    if isinstance(value, list):
        return len(value)
    if isinstance(value, Mapping):
        return len(value.get("records") or [])
    return 0


def format_field_value(record: Optional[Mapping[str, Any]], field: str, prefix: str = "") -> str:
    """Render one requested field of a record as ``field: value``.

    Dotted paths are walked one relationship at a time; a missing parent
    renders the whole path as null without descending further.
    """
    if "." in field:
        relationship, rest = field.split(".", 1)
        related = record.get(relationship) if isinstance(record, Mapping) else None
        if related is None:
            return f"{prefix}{field}: null"
        return format_field_value(related, rest, f"{prefix}{relationship}.")

    value = record.get(field) if isinstance(record, Mapping) else None
    if isinstance(value, list) or (isinstance(value, Mapping) and "records" in value):
        return f"{prefix}{field}: [{count_child_records(value)} records]"
    return f"{prefix}{field}: {format_value(value)}"


def format_subquery_value(record: Mapping[str, Any], field: str) -> str:
    match = SUBQUERY_RELATIONSHIP.search(field)
    if not match:
        return f"{field}: Invalid subquery format"
    relationship = match.group(1)
    return f"{relationship}: [{count_child_records(record.get(relationship))} records]"


def format_query_results(records: List[Mapping[str, Any]], fields: Sequence[str]) -> str:
    """Render query records, one indented line per requested field."""
    blocks = []
    for index, record in enumerate(records, start=1):
        lines = []
        for field in fields:
            if field.startswith("(SELECT"):
                lines.append("    " + format_subquery_value(record, field))
            else:
                lines.append("    " + format_field_value(record, field))
        blocks.append(f"Record {index}:\n" + "\n".join(lines))

    return f"Query returned {len(records)} records:\n\n" + "\n\n".join(blocks)


def enhance_query_error(error_msg: str) -> str:
    """Add a relationship checklist to INVALID_FIELD errors on dotted fields."""
    if "INVALID_FIELD" not in error_msg:
        return error_msg

    match = INVALID_FIELD_NAME.search(error_msg)
    if not match or "." not in match.group(1):
        return error_msg

    invalid_field = match.group(1)
    guide = remediation_text(
        f'Invalid relationship field "{invalid_field}". Please check:',
        RELATIONSHIP_CHECKLIST,
    )
    return f"{guide}\n\nOriginal error: {error_msg}"
