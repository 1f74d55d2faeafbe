"""Text rendering for describe results, object lists and DML results"""
from typing import Any, Dict, List, Mapping, Sequence, Union

from salesforce_mcp.mcp.tools.query_helpers import format_value


def format_object_list(objects: Sequence[Mapping[str, Any]], search_pattern: str) -> str:
    if not objects:
        return f'No Salesforce objects found matching "{search_pattern}".'

    blocks = [
        f"{obj['name']}{' (Custom)' if obj.get('custom') else ''}\n  Label: {obj.get('label')}"
        for obj in objects
    ]
    return f"Found {len(objects)} matching objects:\n\n" + "\n\n".join(blocks)


def format_field_description(field: Mapping[str, Any]) -> str:
    lines = [f"  - {field['name']} ({field.get('label')})"]

    type_line = f"    Type: {field.get('type')}"
    if field.get("length"):
        type_line += f", Length: {field['length']}"
    lines.append(type_line)
    lines.append(f"    Required: {format_value(not field.get('nillable', True))}")

    reference_to = field.get("referenceTo") or []
    if reference_to:
        lines.append(f"    References: {', '.join(reference_to)}")

    picklist_values = field.get("picklistValues") or []
    if picklist_values:
        lines.append(f"    Picklist Values: {', '.join(str(v.get('value')) for v in picklist_values)}")

    return "\n".join(lines)


def format_describe(describe: Mapping[str, Any]) -> str:
    """Render an sObject describe as text; identical input gives identical output."""
    header = f"Object: {describe['name']} ({describe.get('label')})"
    if describe.get("custom"):
        header += " (Custom Object)"

    fields = describe.get("fields") or []
    return "\n".join([header, "Fields:"] + [format_field_description(f) for f in fields])


def _error_lines(error: Mapping[str, Any]) -> List[str]:
    line = f"  - {error.get('message')}"
    if error.get("statusCode"):
        line += f" [{error['statusCode']}]"
    lines = [line]

    fields = error.get("fields")
    if fields:
        lines.append(f"    Fields: {', '.join(fields) if isinstance(fields, list) else fields}")
    return lines


def format_dml_results(operation: str, result: Union[Dict[str, Any], List[Dict[str, Any]]]) -> str:
    """Summarise DML results; failed records are listed but do not fail the call."""
    results = result if isinstance(result, list) else [result]
    success_count = sum(1 for r in results if r.get("success"))
    failure_count = len(results) - success_count

    lines = [
        f"{operation.upper()} operation completed.",
        f"Processed {len(results)} records:",
        f"- Successful: {success_count}",
        f"- Failed: {failure_count}",
    ]

    if failure_count:
        lines.extend(["", "Errors:"])
        for index, r in enumerate(results, start=1):
            errors = r.get("errors")
            if r.get("success") or not errors:
                continue
            lines.append(f"Record {index}:")
            for error in errors if isinstance(errors, list) else [errors]:
                lines.extend(_error_lines(error))

    return "\n".join(lines)
