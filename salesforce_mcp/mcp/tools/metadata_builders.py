"""Metadata documents for custom object and custom field create/update

Create builders produce a fresh document from the request. Update goes
through the ``merge_*`` functions, which overlay only the supplied overrides
on a document previously read from the org so unspecified settings survive.
None of these functions mutate their inputs.
"""
from typing import Any, Dict, Iterable, Mapping, Optional

MetadataDocument = Dict[str, Any]

LONG_TEXT_AREA_LENGTH = 32768
LONG_TEXT_AREA_VISIBLE_LINES = 3

RELATIONSHIP_TYPES = {"Lookup", "MasterDetail"}
PICKLIST_TYPES = {"Picklist", "MultiselectPicklist"}
LONG_TEXT_TYPES = {"TextArea", "LongTextArea"}


def custom_object_name(object_name: str) -> str:
    """``Feedback`` -> ``Feedback__c``; names already suffixed are kept."""
    return object_name if object_name.endswith("__c") else f"{object_name}__c"


def custom_field_api_name(field_name: str) -> str:
    return field_name if field_name.endswith("__c") else f"{field_name}__c"


def custom_field_name(object_name: str, field_name: str) -> str:
    """Full metadata name of a field, e.g. ``Account.Rating__c``."""
    return f"{object_name}.{custom_field_api_name(field_name)}"


def build_object_metadata(
    object_name: str,
    label: str,
    plural_label: str,
    description: Optional[str] = None,
    name_field_label: Optional[str] = None,
    name_field_type: Optional[str] = None,
    name_field_format: Optional[str] = None,
    sharing_model: Optional[str] = None
) -> MetadataDocument:
    """CustomObject document for a new object.

    The name field defaults to a Text field labelled ``<label> Name``; a
    display format is only attached to AutoNumber name fields.
    """
    name_field: Dict[str, Any] = {
        "label": name_field_label or f"{label} Name",
        "type": name_field_type or "Text",
    }
    if name_field_type == "AutoNumber" and name_field_format:
        name_field["displayFormat"] = name_field_format

    document: MetadataDocument = {
        "fullName": custom_object_name(object_name),
        "label": label,
        "pluralLabel": plural_label,
        "nameField": name_field,
        "deploymentStatus": "Deployed",
        "sharingModel": sharing_model or "ReadWrite",
    }
    if description:
        document["description"] = description
    return document


def merge_object_metadata(
    baseline: Mapping[str, Any],
    label: Optional[str] = None,
    plural_label: Optional[str] = None,
    description: Optional[str] = None,
    sharing_model: Optional[str] = None
) -> MetadataDocument:
    """Overlay object overrides on an existing CustomObject document.

    ``label``, ``plural_label`` and ``sharing_model`` replace the baseline
    when non-empty; ``description`` replaces it whenever it is not None, so an
    empty string clears it.
    """
    document = dict(baseline)
    if label:
        document["label"] = label
    if plural_label:
        document["pluralLabel"] = plural_label
    if description is not None:
        document["description"] = description
    if sharing_model:
        document["sharingModel"] = sharing_model
    return document


def build_picklist_value_set(values: Iterable[Any]) -> Dict[str, Any]:
    """Value set with one entry per label, in input order.

    ``values`` items may be mappings or objects with ``label`` and
    ``is_default`` / ``isDefault``.
    """
    entries = []
    for value in values:
        if isinstance(value, Mapping):
            label = value["label"]
            is_default = value.get("isDefault", value.get("is_default"))
        else:
            label = value.label
            is_default = getattr(value, "is_default", None)
        entries.append({
            "fullName": label,
            "default": bool(is_default),
            "label": label,
        })
    return {"valueSetDefinition": {"sorted": True, "value": entries}}


def build_field_metadata(
    object_name: str,
    field_name: str,
    field_type: str,
    label: Optional[str] = None,
    required: Optional[bool] = None,
    unique: Optional[bool] = None,
    external_id: Optional[bool] = None,
    length: Optional[int] = None,
    precision: Optional[int] = None,
    scale: Optional[int] = None,
    reference_to: Optional[str] = None,
    relationship_label: Optional[str] = None,
    relationship_name: Optional[str] = None,
    delete_constraint: Optional[str] = None,
    picklist_values: Optional[Iterable[Any]] = None,
    description: Optional[str] = None
) -> MetadataDocument:
    """CustomField document for a new field, shaped by field type.

    - Lookup/MasterDetail: reference target and relationship names; the
      delete constraint only applies to Lookup
    - TextArea/LongTextArea: always LongTextArea, 32768 chars, 3 visible lines
    - Text: caller length when given
    - Number: precision with scale defaulting to 0
    - Picklist/MultiselectPicklist: sorted value set
    """
    document: MetadataDocument = {
        "fullName": custom_field_name(object_name, field_name),
        "label": label or field_name,
        "type": field_type,
    }
    if required:
        document["required"] = True
    if unique:
        document["unique"] = True
    if external_id:
        document["externalId"] = True
    if description:
        document["description"] = description

    if field_type in RELATIONSHIP_TYPES:
        if reference_to:
            document["referenceTo"] = reference_to
            document["relationshipName"] = relationship_name
            document["relationshipLabel"] = relationship_label or relationship_name
            if field_type == "Lookup" and delete_constraint:
                document["deleteConstraint"] = delete_constraint

    elif field_type in LONG_TEXT_TYPES:
        document["type"] = "LongTextArea"
        document["length"] = LONG_TEXT_AREA_LENGTH
        document["visibleLines"] = LONG_TEXT_AREA_VISIBLE_LINES

    elif field_type == "Text":
        if length:
            document["length"] = length

    elif field_type == "Number":
        if precision:
            document["precision"] = precision
            document["scale"] = scale or 0

    elif field_type in PICKLIST_TYPES:
        if picklist_values:
            document["valueSet"] = build_picklist_value_set(picklist_values)

    return document


def merge_field_metadata(
    baseline: Mapping[str, Any],
    label: Optional[str] = None,
    required: Optional[bool] = None,
    unique: Optional[bool] = None,
    external_id: Optional[bool] = None,
    length: Optional[int] = None,
    precision: Optional[int] = None,
    scale: Optional[int] = None,
    picklist_values: Optional[Iterable[Any]] = None,
    description: Optional[str] = None
) -> MetadataDocument:
    """Overlay field overrides on an existing CustomField document.

    Booleans and description override whenever supplied (False and "" count);
    label, length and precision only when non-empty. Supplying precision
    resets scale to the given value or 0. Picklist values replace the whole
    value set, and only on picklist fields.
    """
    document = dict(baseline)
    if label:
        document["label"] = label
    if required is not None:
        document["required"] = required
    if unique is not None:
        document["unique"] = unique
    if external_id is not None:
        document["externalId"] = external_id
    if description is not None:
        document["description"] = description
    if length:
        document["length"] = length
    if precision:
        document["precision"] = precision
        document["scale"] = scale or 0

    if picklist_values and baseline.get("type") in PICKLIST_TYPES:
        document["valueSet"] = build_picklist_value_set(picklist_values)

    return document
