"""Error taxonomy for Salesforce MCP tool calls

Every error raised by a tool handler is converted into an error envelope by the
dispatcher, so these classes only carry a readable message.
"""


class SalesforceMCPError(Exception):
    """Base class for tool-call failures"""
    pass


class UnknownTool(SalesforceMCPError):
    """No tool is registered under the requested name"""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class InvalidArguments(SalesforceMCPError):
    """A required argument is missing or has the wrong shape"""
    pass


class InvalidRelationshipField(SalesforceMCPError):
    """Malformed dotted relationship path or child sub-query"""
    pass


class EmptySearchTerm(SalesforceMCPError):
    pass


class NotFound(SalesforceMCPError):
    """Metadata update target does not exist"""
    pass


class UpstreamFailure(SalesforceMCPError):
    """Salesforce rejected the call or reported an unsuccessful result"""
    pass


class ConnectionConfigError(SalesforceMCPError):
    """Credentials needed to log in to Salesforce are not configured"""
    pass
