# IMPORTANT: import tool modules so @register_tool executes.
# Import order is catalog order; add new tool modules here.
from salesforce_mcp.mcp.tools import search_objects as _search_objects  # noqa: F401
from salesforce_mcp.mcp.tools import describe_object as _describe_object  # noqa: F401
from salesforce_mcp.mcp.tools import query_records as _query_records  # noqa: F401
from salesforce_mcp.mcp.tools import dml_records as _dml_records  # noqa: F401
from salesforce_mcp.mcp.tools import manage_object as _manage_object  # noqa: F401
from salesforce_mcp.mcp.tools import manage_field as _manage_field  # noqa: F401
from salesforce_mcp.mcp.tools import search_all as _search_all  # noqa: F401

from salesforce_mcp.mcp.registry import tool_registry  # noqa: F401
