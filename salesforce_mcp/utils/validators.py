"""Input validation for SOQL field lists and SOSL search terms"""
import re
from typing import Iterable

from salesforce_mcp.errors import EmptySearchTerm, InvalidRelationshipField

# Salesforce allows at most five levels of parent relationship traversal
MAX_RELATIONSHIP_DEPTH = 5

SUBQUERY_PATTERN = re.compile(r'^\(SELECT.*FROM.*\)$', re.DOTALL)
SUBQUERY_FIELDS = re.compile(r'^\(SELECT\s+(.*?)\s+FROM\b', re.DOTALL)


def validate_dotted_path(field: str) -> bool:
    """Check a parent path such as ``Account.Owner.Name`` for empty segments and depth."""
    parts = field.split('.')
    if any(not part for part in parts):
        raise InvalidRelationshipField(
            f'Invalid relationship field format: "{field}". '
            'Relationship fields should use proper dot notation (e.g., "Account.Name")'
        )
    if len(parts) > MAX_RELATIONSHIP_DEPTH:
        raise InvalidRelationshipField(
            f'Relationship field "{field}" exceeds maximum depth of {MAX_RELATIONSHIP_DEPTH} levels'
        )
    return True


def validate_relationship_field(field: str) -> bool:
    """
    Validate a single SOQL field expression.

    Rules:
    - Dotted parent paths (``Account.Owner.Name``) must not contain empty
      segments and may not exceed five levels
    - Anything mentioning ``SELECT`` must be a parenthesized child sub-query,
      i.e. ``(SELECT ... FROM ...)``; dotted paths in its select list follow
      the same rules as top-level fields

    Args:
        field: Field expression as passed in the ``fields`` list

    Returns:
        True if valid

    Raises:
        InvalidRelationshipField: If the expression is malformed
    """
    if 'SELECT' not in field:
        if '.' in field:
            validate_dotted_path(field)
        return True

    if not SUBQUERY_PATTERN.match(field):
        raise InvalidRelationshipField(
            f'Invalid subquery format: "{field}". '
            'Child relationship queries should be wrapped in parentheses'
        )

    select_list = SUBQUERY_FIELDS.match(field)
    if select_list:
        for inner in select_list.group(1).split(','):
            inner = inner.strip()
            if '.' in inner:
                validate_dotted_path(inner)

    return True


def validate_relationship_fields(fields: Iterable[str]) -> bool:
    """Validate every field expression, failing on the first malformed one."""
    for field in fields:
        validate_relationship_field(field)
    return True


def validate_search_term(term: str) -> str:
    """
    Validate a SOSL search term.

    Args:
        term: Raw search term (wildcards ``*`` and ``?`` are allowed)

    Returns:
        The term unchanged

    Raises:
        EmptySearchTerm: If the term is empty or whitespace only
    """
    if not term or not term.strip():
        raise EmptySearchTerm("Search term cannot be empty")
    return term
