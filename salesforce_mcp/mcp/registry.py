"""Static catalog of the tools this server exposes"""
from dataclasses import dataclass
from typing import Annotated, Any, Callable, Dict, Iterator, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, StringConstraints

ToolHandler = Callable[[Any, BaseModel], str]

# Required names: blank or whitespace-only values count as missing
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ToolArgs(BaseModel):
    """Base for per-tool argument models: camelCase on the wire, unknown keys ignored."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description, argument contract and handler of one tool."""
    name: str
    description: str
    args_model: Type[BaseModel]
    handler: ToolHandler

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema of the accepted arguments, keyed by wire (camelCase) names."""
        return self.args_model.model_json_schema(by_alias=True)


class ToolRegistry:
    """Ordered, name-unique collection of ToolDescriptors.

    Lookup misses return None; reporting them is the dispatcher's job.
    """

    def __init__(self):
        self._tools: Dict[str, ToolDescriptor] = {}

    def register(self, descriptor: ToolDescriptor) -> ToolDescriptor:
        if descriptor.name in self._tools:
            raise ValueError(f"Tool already registered: {descriptor.name}")
        self._tools[descriptor.name] = descriptor
        return descriptor

    def get(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    def list_tools(self) -> Tuple[ToolDescriptor, ...]:
        return tuple(self._tools.values())

    def keys(self):
        return self._tools.keys()

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self.list_tools())

    def __len__(self) -> int:
        return len(self._tools)


# Process-wide catalog, filled by @register_tool at import time
tool_registry = ToolRegistry()


def register_tool(name: str, description: str, args_model: Type[BaseModel], registry: ToolRegistry = tool_registry):
    """Decorator registering ``handler(sf, args) -> str`` under ``name``."""
    def decorator(handler: ToolHandler) -> ToolHandler:
        registry.register(ToolDescriptor(
            name=name,
            description=description,
            args_model=args_model,
            handler=handler,
        ))
        return handler
    return decorator


def get_tool(name: str) -> Optional[ToolDescriptor]:
    return tool_registry.get(name)


def list_tools() -> Tuple[ToolDescriptor, ...]:
    return tool_registry.list_tools()
