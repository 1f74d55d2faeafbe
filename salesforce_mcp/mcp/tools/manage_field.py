"""Create or update custom fields through the Metadata API"""
import logging
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from salesforce_mcp.errors import NotFound, UpstreamFailure
from salesforce_mcp.mcp.registry import RequiredStr, ToolArgs, register_tool
from salesforce_mcp.mcp.tools.metadata_builders import (
    build_field_metadata,
    custom_field_api_name,
    custom_field_name,
    merge_field_metadata,
)
from salesforce_mcp.mcp.tools.utils import call_metadata_api, format_metadata_error, is_successful

logger = logging.getLogger(__name__)

FieldType = Literal[
    "Checkbox", "Currency", "Date", "DateTime", "Email", "Number", "Percent",
    "Phone", "Picklist", "MultiselectPicklist", "Text", "TextArea", "LongTextArea",
    "Html", "Url", "Lookup", "MasterDetail",
]


class PicklistValue(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    label: str
    is_default: Optional[bool] = Field(default=None, alias="isDefault")


class ManageFieldArgs(ToolArgs):
    operation: Literal["create", "update"] = Field(
        description="Whether to create new field or update existing"
    )
    object_name: RequiredStr = Field(alias="objectName", description="API name of the object to add/modify the field")
    field_name: RequiredStr = Field(alias="fieldName", description="API name for the field (without __c suffix)")
    label: Optional[str] = Field(default=None, description="Label for the field")
    type: Optional[FieldType] = Field(default=None, description="Field type (required for create)")
    required: Optional[bool] = Field(default=None, description="Whether the field is required")
    unique: Optional[bool] = Field(default=None, description="Whether the field value must be unique")
    external_id: Optional[bool] = Field(default=None, alias="externalId", description="Whether the field is an external ID")
    length: Optional[int] = Field(default=None, description="Length for text fields")
    precision: Optional[int] = Field(default=None, description="Precision for numeric fields")
    scale: Optional[int] = Field(default=None, description="Scale for numeric fields")
    reference_to: Optional[str] = Field(
        default=None, alias="referenceTo",
        description="API name of the object to reference (for Lookup/MasterDetail)"
    )
    relationship_label: Optional[str] = Field(
        default=None, alias="relationshipLabel",
        description="Label for the relationship (for Lookup/MasterDetail)"
    )
    relationship_name: Optional[str] = Field(
        default=None, alias="relationshipName",
        description="API name for the relationship (for Lookup/MasterDetail)"
    )
    delete_constraint: Optional[Literal["Cascade", "Restrict", "SetNull"]] = Field(
        default=None, alias="deleteConstraint", description="Delete constraint for Lookup fields"
    )
    picklist_values: Optional[List[PicklistValue]] = Field(
        default=None, alias="picklistValues", description="Values for Picklist/MultiselectPicklist fields"
    )
    description: Optional[str] = Field(default=None, description="Description of the field")

    @model_validator(mode="after")
    def require_type_for_create(self):
        if self.operation == "create" and not self.type:
            raise ValueError("type is required for field creation")
        return self


@register_tool(
    name="manage_field",
    description=(
        "Create new custom fields or modify existing fields on any Salesforce object:\n"
        "  - Field Types: Text, Number, Date, Lookup, Master-Detail, Picklist etc.\n"
        "  - Properties: Required, Unique, External ID, Length, Scale etc.\n"
        "  - Relationships: Create lookups and master-detail relationships\n"
        "  Examples: Add Rating__c picklist to Account, Create Account lookup on Custom Object\n"
        "  Note: Changes affect metadata and require proper permissions"
    ),
    args_model=ManageFieldArgs,
)
def manage_field(sf, args: ManageFieldArgs) -> str:
    full_name = custom_field_name(args.object_name, args.field_name)
    api_name = custom_field_api_name(args.field_name)
    target = f"{api_name} on {args.object_name}"

    if args.operation == "create":
        metadata = build_field_metadata(
            object_name=args.object_name,
            field_name=args.field_name,
            field_type=args.type,
            label=args.label,
            required=args.required,
            unique=args.unique,
            external_id=args.external_id,
            length=args.length,
            precision=args.precision,
            scale=args.scale,
            reference_to=args.reference_to,
            relationship_label=args.relationship_label,
            relationship_name=args.relationship_name,
            delete_constraint=args.delete_constraint,
            picklist_values=args.picklist_values,
            description=args.description,
        )
        result = call_metadata_api("creating", "field", target, sf.metadata.create, "CustomField", metadata)
        if not is_successful(result):
            raise UpstreamFailure(format_metadata_error(result, f"create custom field {api_name}"))
        logger.info("Created custom field %s", full_name)
        return f"Successfully created custom field {api_name} on {args.object_name}"

    existing = call_metadata_api("reading", "field", target, sf.metadata.read, "CustomField", [full_name])
    baseline = existing[0] if isinstance(existing, list) and existing else existing
    if not baseline:
        raise NotFound(f"Field {api_name} not found on object {args.object_name}")

    metadata = merge_field_metadata(
        baseline,
        label=args.label,
        required=args.required,
        unique=args.unique,
        external_id=args.external_id,
        length=args.length,
        precision=args.precision,
        scale=args.scale,
        picklist_values=args.picklist_values,
        description=args.description,
    )
    result = call_metadata_api("updating", "field", target, sf.metadata.update, "CustomField", metadata)
    if not is_successful(result):
        raise UpstreamFailure(format_metadata_error(result, f"update custom field {api_name}"))
    logger.info("Updated custom field %s", full_name)
    return f"Successfully updated custom field {api_name} on {args.object_name}"
