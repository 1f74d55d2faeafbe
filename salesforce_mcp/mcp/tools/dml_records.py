"""Insert, update, delete and upsert records"""
import logging
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, model_validator

from salesforce_mcp.errors import InvalidArguments
from salesforce_mcp.mcp.registry import RequiredStr, ToolArgs, register_tool
from salesforce_mcp.mcp.tools.formatters import format_dml_results

logger = logging.getLogger(__name__)


class DMLRecordsArgs(ToolArgs):
    operation: Literal["insert", "update", "delete", "upsert"] = Field(
        description="Type of DML operation to perform"
    )
    object_name: RequiredStr = Field(alias="objectName", description="API name of the object")
    records: List[Dict[str, Any]] = Field(description="Array of records to process")
    external_id_field: Optional[str] = Field(
        default=None, alias="externalIdField",
        description="External ID field name for upsert operations"
    )

    @model_validator(mode="after")
    def require_external_id_for_upsert(self):
        if self.operation == "upsert" and not self.external_id_field:
            raise ValueError("externalIdField is required for upsert operations")
        return self


@register_tool(
    name="dml_records",
    description=(
        "Perform data manipulation operations on Salesforce records:\n"
        "  - insert: Create new records\n"
        "  - update: Modify existing records (requires Id)\n"
        "  - delete: Remove records (requires Id)\n"
        "  - upsert: Insert or update based on external ID field\n"
        "  Examples: Insert new Accounts, Update Case status, Delete old records, "
        "Upsert based on custom external ID"
    ),
    args_model=DMLRecordsArgs,
)
def dml_records(sf, args: DMLRecordsArgs) -> str:
    sobject = sf.sobject(args.object_name)

    if args.operation == "insert":
        result = sobject.create(args.records)
    elif args.operation == "update":
        result = sobject.update(args.records)
    elif args.operation == "delete":
        missing = [i for i, record in enumerate(args.records, start=1) if not record.get("Id")]
        if missing:
            raise InvalidArguments(
                f"Id is required for delete operations (missing on record {', '.join(map(str, missing))})"
            )
        result = sobject.destroy([record["Id"] for record in args.records])
    else:
        result = sobject.upsert(args.records, args.external_id_field)

    logger.info("%s on %s processed %d records", args.operation, args.object_name, len(args.records))
    return format_dml_results(args.operation, result)
