"""Find standard and custom objects by name or label"""
import logging

from pydantic import Field

from salesforce_mcp.mcp.registry import RequiredStr, ToolArgs, register_tool
from salesforce_mcp.mcp.tools.formatters import format_object_list

logger = logging.getLogger(__name__)


class SearchObjectsArgs(ToolArgs):
    search_pattern: RequiredStr = Field(
        alias="searchPattern",
        description="Search pattern to find objects (e.g., 'Account Coverage' will find objects like 'AccountCoverage__c')"
    )


@register_tool(
    name="search_objects",
    description=(
        "Search for Salesforce standard and custom objects by name pattern. "
        "Examples: 'Account' will find Account, AccountHistory; "
        "'Order' will find WorkOrder, ServiceOrder__c etc."
    ),
    args_model=SearchObjectsArgs,
)
def search_objects(sf, args: SearchObjectsArgs) -> str:
    """Every whitespace-separated term must appear in the API name or the label."""
    terms = [term for term in args.search_pattern.lower().split() if term]

    matching = [
        obj for obj in sf.describe_global().get("sobjects", [])
        if all(term in obj["name"].lower() or term in str(obj.get("label", "")).lower() for term in terms)
    ]
    logger.info("search_objects matched %d objects for %r", len(matching), args.search_pattern)
    return format_object_list(matching, args.search_pattern)
