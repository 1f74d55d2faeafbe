"""Query records with SOQL, including parent and child relationship fields"""
import logging
from typing import List, Optional

from pydantic import Field

from salesforce_mcp.errors import UpstreamFailure
from salesforce_mcp.mcp.registry import RequiredStr, ToolArgs, register_tool
from salesforce_mcp.mcp.tools.query_helpers import (
    build_soql_query,
    enhance_query_error,
    format_query_results,
)

logger = logging.getLogger(__name__)

DESCRIPTION = """Query records from any Salesforce object using SOQL, including relationship queries.

Examples:
1. Parent-to-child query (e.g., Account with Contacts):
   - objectName: "Account"
   - fields: ["Name", "(SELECT Id, FirstName, LastName FROM Contacts)"]

2. Child-to-parent query (e.g., Contact with Account details):
   - objectName: "Contact"
   - fields: ["FirstName", "LastName", "Account.Name", "Account.Industry"]

3. Multiple level query (e.g., Contact -> Account -> Owner):
   - objectName: "Contact"
   - fields: ["Name", "Account.Name", "Account.Owner.Name"]

4. Related object filtering:
   - objectName: "Contact"
   - fields: ["Name", "Account.Name"]
   - whereClause: "Account.Industry = 'Technology'"

Note: When using relationship fields:
- Use dot notation for parent relationships (e.g., "Account.Name")
- Use subqueries in parentheses for child relationships (e.g., "(SELECT Id FROM Contacts)")
- Custom relationship fields end in "__r" (e.g., "CustomObject__r.Name")"""


class QueryRecordsArgs(ToolArgs):
    object_name: RequiredStr = Field(alias="objectName", description="API name of the object to query")
    fields: List[str] = Field(description="List of fields to retrieve, including relationship fields")
    where_clause: Optional[str] = Field(
        default=None, alias="whereClause",
        description="WHERE clause, can include conditions on related objects"
    )
    order_by: Optional[str] = Field(
        default=None, alias="orderBy",
        description="ORDER BY clause, can include fields from related objects"
    )
    limit: Optional[int] = Field(default=None, description="Maximum number of records to return")


@register_tool(name="query_records", description=DESCRIPTION, args_model=QueryRecordsArgs)
def query_records(sf, args: QueryRecordsArgs) -> str:
    soql = build_soql_query(
        object_name=args.object_name,
        fields=args.fields,
        where_clause=args.where_clause,
        order_by=args.order_by,
        limit=args.limit,
    )

    try:
        result = sf.query(soql)
    except Exception as e:
        logger.error("query_records failed: %s", e)
        raise UpstreamFailure(f"Error executing query: {enhance_query_error(str(e))}") from e

    return format_query_results(result.get("records", []), args.fields)
