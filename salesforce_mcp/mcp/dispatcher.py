"""Tool-call dispatch: validate arguments, run the handler, wrap the result

``Dispatcher.invoke`` is the single entry point the protocol server calls. It
always returns a ``ResponseEnvelope``; failures become ``isError`` envelopes
with readable text instead of exceptions.
"""
import logging
import time
from functools import wraps
from typing import Any, Callable, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from salesforce_mcp.errors import InvalidArguments, SalesforceMCPError, UnknownTool
from salesforce_mcp.mcp.catalog import tool_registry
from salesforce_mcp.mcp.registry import ToolDescriptor, ToolRegistry
from salesforce_mcp.mcp.tools.utils import ResponseSizeManager
from salesforce_mcp.services.capability import SalesforceCapability
from salesforce_mcp.services.salesforce import get_salesforce_connection
from salesforce_mcp.utils.logging import log_tool_execution, new_correlation_id

logger = logging.getLogger(__name__)


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ResponseEnvelope(BaseModel):
    """``{content: [{type: "text", text}], isError}`` returned for every call"""
    model_config = ConfigDict(populate_by_name=True)

    content: List[TextContent]
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def success(cls, text: str) -> "ResponseEnvelope":
        return cls(content=[TextContent(text=text)], is_error=False)

    @classmethod
    def error(cls, text: str) -> "ResponseEnvelope":
        return cls(content=[TextContent(text=text)], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


def describe_validation_error(tool_name: str, error: ValidationError) -> str:
    """One readable line per pydantic error, keyed by wire field path."""
    problems = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        message = err.get("msg", "invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        problems.append(f"{location}: {message}" if location else message)
    return f"Invalid arguments for {tool_name}: " + "; ".join(problems)


def catch_tool_errors(func: Callable[..., "ResponseEnvelope"]) -> Callable[..., "ResponseEnvelope"]:
    """Convert any exception raised by a tool run into an error envelope."""
    @wraps(func)
    def wrapper(*args, **kwargs) -> ResponseEnvelope:
        try:
            return func(*args, **kwargs)
        except SalesforceMCPError as e:
            logger.warning("%s: %s", e.__class__.__name__, e)
            return ResponseEnvelope.error(f"Error: {e}")
        except Exception as e:
            logger.exception("Tool call failed")
            return ResponseEnvelope.error(f"Error: {str(e) or e.__class__.__name__}")
    return wrapper


class Dispatcher:
    """Routes ``(tool name, argument bag)`` to the registered handler.

    Args:
        connection_factory: Returns the SalesforceCapability for one call;
            it is only invoked after the arguments validate
        registry: Tool catalog, the process-wide one by default
    """

    def __init__(
        self,
        connection_factory: Callable[[], SalesforceCapability] = get_salesforce_connection,
        registry: ToolRegistry = tool_registry
    ):
        self.connection_factory = connection_factory
        self.registry = registry

    @staticmethod
    def validate_arguments(descriptor: ToolDescriptor, arguments: Optional[Mapping[str, Any]]) -> BaseModel:
        if not arguments or not isinstance(arguments, Mapping):
            raise InvalidArguments("Arguments are required")
        try:
            return descriptor.args_model.model_validate(dict(arguments))
        except ValidationError as e:
            raise InvalidArguments(describe_validation_error(descriptor.name, e)) from e

    @catch_tool_errors
    def _run(self, descriptor: ToolDescriptor, arguments: Optional[Mapping[str, Any]]) -> ResponseEnvelope:
        args = self.validate_arguments(descriptor, arguments)
        sf = self.connection_factory()
        return ResponseEnvelope.success(descriptor.handler(sf, args))

    def invoke(self, tool_name: str, arguments: Optional[Mapping[str, Any]] = None) -> ResponseEnvelope:
        new_correlation_id()
        start = time.perf_counter()

        descriptor = self.registry.get(tool_name)
        if descriptor is None:
            envelope = ResponseEnvelope.error(str(UnknownTool(tool_name)))
        else:
            envelope = self._run(descriptor, arguments)

        log_tool_execution(
            logger,
            tool_name=tool_name,
            duration_ms=(time.perf_counter() - start) * 1000,
            success=not envelope.is_error,
            error=envelope.text if envelope.is_error else None,
        )
        ResponseSizeManager.check_response_size(tool_name, envelope.text)
        return envelope
