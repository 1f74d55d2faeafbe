"""Search across several objects at once with SOSL"""
import logging
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from salesforce_mcp.errors import UpstreamFailure
from salesforce_mcp.mcp.registry import RequiredStr, ToolArgs, register_tool
from salesforce_mcp.mcp.tools.search_helpers import (
    VALUE_WITH_CLAUSES,
    build_sosl_query,
    enhance_search_error,
    format_search_results,
)

logger = logging.getLogger(__name__)

DESCRIPTION = """Search across multiple Salesforce objects using SOSL (Salesforce Object Search Language).

Examples:
1. Basic search across all objects:
   {
     "searchTerm": "John",
     "objects": [
       { "name": "Account", "fields": ["Name"], "limit": 10 },
       { "name": "Contact", "fields": ["FirstName", "LastName", "Email"] }
     ]
   }

2. Advanced search with filters:
   {
     "searchTerm": "Cloud*",
     "searchIn": "NAME FIELDS",
     "objects": [
       {
         "name": "Account",
         "fields": ["Name", "Industry"],
         "orderBy": "Name DESC",
         "where": "Industry = 'Technology'"
       }
     ],
     "withClauses": [
       { "type": "NETWORK", "value": "ALL NETWORKS" },
       { "type": "SNIPPET", "fields": ["Description"] }
     ]
   }

Notes:
- Use * and ? for wildcards in search terms
- Each object can have its own WHERE, ORDER BY, and LIMIT clauses
- Support for WITH clauses: DATA CATEGORY, DIVISION, METADATA, NETWORK, PRICEBOOKID, SNIPPET, SECURITY_ENFORCED
- "updateable" and "viewable" options control record access filtering"""

SearchIn = Literal["ALL FIELDS", "NAME FIELDS", "EMAIL FIELDS", "PHONE FIELDS", "SIDEBAR FIELDS"]


class SearchObject(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: RequiredStr = Field(description="API name of the object")
    fields: List[str] = Field(description="Fields to return for this object")
    where: Optional[str] = Field(default=None, description="WHERE clause for this object")
    order_by: Optional[str] = Field(default=None, alias="orderBy", description="ORDER BY clause for this object")
    limit: Optional[int] = Field(default=None, description="Maximum number of records to return for this object")


class WithClause(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Free-form: unsupported types are dropped from the query rather than rejected
    type: str = Field(
        description="DATA CATEGORY, DIVISION, METADATA, NETWORK, PRICEBOOKID, SNIPPET or SECURITY_ENFORCED"
    )
    value: Optional[str] = Field(default=None, description="Value for the WITH clause")
    fields: Optional[List[str]] = Field(default=None, description="Fields for SNIPPET clause")

    @model_validator(mode="after")
    def require_value_for_value_clauses(self):
        if self.type in VALUE_WITH_CLAUSES and not (self.value and self.value.strip()):
            raise ValueError(f"value is required for WITH {self.type} clauses")
        return self


class SearchAllArgs(ToolArgs):
    search_term: str = Field(alias="searchTerm", description="Text to search for (supports wildcards * and ?)")
    search_in: Optional[SearchIn] = Field(default=None, alias="searchIn", description="Which fields to search in")
    objects: List[SearchObject] = Field(description="List of objects to search and their return fields")
    with_clauses: Optional[List[WithClause]] = Field(
        default=None, alias="withClauses", description="Additional WITH clauses for the search"
    )
    updateable: Optional[bool] = Field(default=None, description="Return only updateable records")
    viewable: Optional[bool] = Field(default=None, description="Return only viewable records")


@register_tool(name="search_all", description=DESCRIPTION, args_model=SearchAllArgs)
def search_all(sf, args: SearchAllArgs) -> str:
    sosl = build_sosl_query(
        search_term=args.search_term,
        objects=args.objects,
        search_in=args.search_in,
        with_clauses=args.with_clauses,
        updateable=args.updateable,
        viewable=args.viewable,
    )

    try:
        result = sf.search(sosl)
    except Exception as e:
        logger.error("search_all failed: %s", e)
        raise UpstreamFailure(f"Error executing search: {enhance_search_error(str(e))}") from e

    return format_search_results(result.get("searchRecords", []), args.objects, args.with_clauses)
