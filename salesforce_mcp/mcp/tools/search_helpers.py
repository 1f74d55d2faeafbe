"""SOSL search builder and search result formatting

The builders accept the ``search_all`` argument models (or anything with the
same attributes): objects expose ``name``, ``fields``, ``where``,
``order_by``, ``limit``; WITH clauses expose ``type``, ``value``, ``fields``.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from salesforce_mcp.mcp.tools.query_helpers import format_value
from salesforce_mcp.mcp.tools.utils import SEARCH_ERROR_PATTERNS, enhance_error
from salesforce_mcp.utils.validators import validate_search_term

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_IN = "ALL FIELDS"

VALUE_WITH_CLAUSES = {"DATA CATEGORY", "DIVISION", "NETWORK", "PRICEBOOKID"}
FLAG_WITH_CLAUSES = {"METADATA", "SECURITY_ENFORCED"}


def build_with_clause(clause: Any) -> str:
    """Render one WITH modifier.

    Unknown modifier types render as an empty string and are dropped from the
    final query.
    """
    clause_type = clause.type
    if clause_type == "SNIPPET":
        return f"WITH SNIPPET ({', '.join(clause.fields or [])})"
    if clause_type in VALUE_WITH_CLAUSES:
        return f"WITH {clause_type} = {clause.value}"
    if clause_type in FLAG_WITH_CLAUSES:
        return f"WITH {clause_type}"
    return ""


def build_object_clause(obj: Any) -> str:
    clause = f"{obj.name}({','.join(obj.fields)}"
    if obj.where:
        clause += f" WHERE {obj.where}"
    if obj.order_by:
        clause += f" ORDER BY {obj.order_by}"
    if obj.limit:
        clause += f" LIMIT {obj.limit}"
    return clause + ")"


def build_returning_clause(objects: Sequence[Any]) -> str:
    return ", ".join(build_object_clause(obj) for obj in objects)


def build_access_clause(updateable: Optional[bool], viewable: Optional[bool]) -> str:
    flags = []
    if updateable:
        flags.append("UPDATEABLE")
    if viewable:
        flags.append("VIEWABLE")
    return f"RETURNING {','.join(flags)}" if flags else ""


def build_sosl_query(
    search_term: str,
    objects: Sequence[Any],
    search_in: Optional[str] = None,
    with_clauses: Optional[Sequence[Any]] = None,
    updateable: Optional[bool] = None,
    viewable: Optional[bool] = None
) -> str:
    """Build a SOSL ``FIND`` statement.

    Args:
        search_term: Text to find (wildcards ``*`` and ``?`` allowed)
        objects: Per-object RETURNING specs, rendered in the given order
        search_in: Field group, defaults to ALL FIELDS
        with_clauses: Optional WITH modifiers
        updateable: Append RETURNING UPDATEABLE
        viewable: Append RETURNING VIEWABLE

    Raises:
        EmptySearchTerm: If the term is blank
    """
    validate_search_term(search_term)

    parts = [f"FIND {{{search_term}}} IN {search_in or DEFAULT_SEARCH_IN}"]
    parts.extend(build_with_clause(clause) for clause in with_clauses or [])
    parts.append(f"RETURNING {build_returning_clause(objects)}")
    parts.append(build_access_clause(updateable, viewable))
    return " ".join(part for part in parts if part)


def _record_type(record: Mapping[str, Any]) -> str:
    attributes = record.get("attributes") or {}
    return str(attributes.get("type") or "")


def group_search_records(search_records: List[Mapping[str, Any]], objects: Sequence[Any]) -> Dict[str, List[Mapping[str, Any]]]:
    """Bucket flat search records by requested object, keeping the caller's order."""
    buckets: Dict[str, List[Mapping[str, Any]]] = {obj.name: [] for obj in objects}
    lookup = {obj.name.lower(): obj.name for obj in objects}
    for record in search_records:
        name = lookup.get(_record_type(record).lower())
        if name is not None:
            buckets[name].append(record)
    return buckets


def format_search_results(search_records: List[Mapping[str, Any]], objects: Sequence[Any], with_clauses: Optional[Sequence[Any]] = None) -> str:
    """Render SOSL results grouped per requested object."""
    clause_types = {clause.type for clause in with_clauses or []}
    buckets = group_search_records(search_records, objects)

    lines = ["Search Results:"]
    for index, obj in enumerate(objects):
        records = buckets[obj.name]
        lines.append(f"{obj.name} ({len(records)} records found):")

        for record_index, record in enumerate(records, start=1):
            lines.append(f"  Record {record_index}:")
            for field in obj.fields:
                lines.append(f"    {field}: {format_value(record.get(field))}")

            if "METADATA" in clause_types:
                attributes = record.get("attributes") or {}
                lines.append("    Metadata:")
                lines.append(f"      Last Modified: {format_value(attributes.get('lastModifiedDate'))}")

            if "SNIPPET" in clause_types:
                lines.append("    Snippets:")
                snippets = record.get("snippets") or []
                if snippets:
                    lines.extend(f"      {s.get('field')}: {s.get('snippet')}" for s in snippets)
                else:
                    lines.append("      None")

        if index < len(objects) - 1:
            lines.append("")

    return "\n".join(lines)


def enhance_search_error(error_msg: str) -> str:
    return enhance_error(error_msg, SEARCH_ERROR_PATTERNS)
