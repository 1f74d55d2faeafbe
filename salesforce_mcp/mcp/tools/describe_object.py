"""Describe an object's fields and relationships"""
from pydantic import Field

from salesforce_mcp.mcp.registry import RequiredStr, ToolArgs, register_tool
from salesforce_mcp.mcp.tools.formatters import format_describe


class DescribeObjectArgs(ToolArgs):
    object_name: RequiredStr = Field(
        alias="objectName",
        description="API name of the object (e.g., 'Account', 'Contact', 'Custom_Object__c')"
    )


@register_tool(
    name="describe_object",
    description=(
        "Get detailed schema metadata including all fields, relationships, and field properties "
        "of any Salesforce object. Examples: 'Account' shows all Account fields including custom "
        "fields; 'Case' shows all Case fields including relationships to Account, Contact etc."
    ),
    args_model=DescribeObjectArgs,
)
def describe_object(sf, args: DescribeObjectArgs) -> str:
    return format_describe(sf.describe(args.object_name))
