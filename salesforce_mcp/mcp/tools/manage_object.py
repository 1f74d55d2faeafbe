"""Create or update custom objects through the Metadata API"""
import logging
from typing import Literal, Optional

from pydantic import Field, model_validator

from salesforce_mcp.errors import NotFound, UpstreamFailure
from salesforce_mcp.mcp.registry import RequiredStr, ToolArgs, register_tool
from salesforce_mcp.mcp.tools.metadata_builders import (
    build_object_metadata,
    custom_object_name,
    merge_object_metadata,
)
from salesforce_mcp.mcp.tools.utils import call_metadata_api, format_metadata_error, is_successful

logger = logging.getLogger(__name__)

SharingModel = Literal["ReadWrite", "Read", "Private", "ControlledByParent"]


class ManageObjectArgs(ToolArgs):
    operation: Literal["create", "update"] = Field(
        description="Whether to create new object or update existing"
    )
    object_name: RequiredStr = Field(alias="objectName", description="API name for the object (without __c suffix)")
    label: Optional[str] = Field(default=None, description="Label for the object")
    plural_label: Optional[str] = Field(default=None, alias="pluralLabel", description="Plural label for the object")
    description: Optional[str] = Field(default=None, description="Description of the object")
    name_field_label: Optional[str] = Field(default=None, alias="nameFieldLabel", description="Label for the name field")
    name_field_type: Optional[Literal["Text", "AutoNumber"]] = Field(
        default=None, alias="nameFieldType", description="Type of the name field"
    )
    name_field_format: Optional[str] = Field(
        default=None, alias="nameFieldFormat",
        description="Display format for AutoNumber field (e.g., 'A-{0000}')"
    )
    sharing_model: Optional[SharingModel] = Field(
        default=None, alias="sharingModel", description="Sharing model for the object"
    )

    @model_validator(mode="after")
    def require_labels_for_create(self):
        if self.operation == "create" and (not self.label or not self.plural_label):
            raise ValueError("label and pluralLabel are required for object creation")
        return self


@register_tool(
    name="manage_object",
    description=(
        "Create new custom objects or modify existing ones in Salesforce:\n"
        "  - Create: New custom objects with fields, relationships, and settings\n"
        "  - Update: Modify existing object settings, labels, sharing model\n"
        "  Examples: Create Customer_Feedback__c object, Update object sharing settings\n"
        "  Note: Changes affect metadata and require proper permissions"
    ),
    args_model=ManageObjectArgs,
)
def manage_object(sf, args: ManageObjectArgs) -> str:
    full_name = custom_object_name(args.object_name)

    if args.operation == "create":
        metadata = build_object_metadata(
            object_name=args.object_name,
            label=args.label,
            plural_label=args.plural_label,
            description=args.description,
            name_field_label=args.name_field_label,
            name_field_type=args.name_field_type,
            name_field_format=args.name_field_format,
            sharing_model=args.sharing_model,
        )
        result = call_metadata_api("creating", "object", full_name, sf.metadata.create, "CustomObject", metadata)
        if not is_successful(result):
            raise UpstreamFailure(format_metadata_error(result, f"create custom object {full_name}"))
        logger.info("Created custom object %s", full_name)
        return f"Successfully created custom object {full_name}"

    existing = call_metadata_api("reading", "object", full_name, sf.metadata.read, "CustomObject", [full_name])
    baseline = existing[0] if isinstance(existing, list) and existing else existing
    if not baseline:
        raise NotFound(f"Object {full_name} not found")

    metadata = merge_object_metadata(
        baseline,
        label=args.label,
        plural_label=args.plural_label,
        description=args.description,
        sharing_model=args.sharing_model,
    )
    result = call_metadata_api("updating", "object", full_name, sf.metadata.update, "CustomObject", metadata)
    if not is_successful(result):
        raise UpstreamFailure(format_metadata_error(result, f"update custom object {full_name}"))
    logger.info("Updated custom object %s", full_name)
    return f"Successfully updated custom object {full_name}"
