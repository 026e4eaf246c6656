"""Tool registry - declares the WordPress tools an MCP client can call and runs them.

Tools are plain coroutines registered with the @tool decorator:

    @tool(
        name="wordpress_get_post",
        description="Get a single post by ID.",
        action="get post",
        group="posts",
        parameters={"post_id": "ID of the post"},
    )
    async def get_post(wp: WordPressClient, post_id: int) -> ToolResult:
        ...

The first argument is the injected WordPressClient; the remaining keyword
arguments become the tool's parameters (type hint -> ParamKind, a default
makes it optional). ``parameters`` maps names to the descriptions shown to
the model.
"""

import importlib
import inspect
import json
import logging
import types
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)

CORE_GROUPS = (
    "posts",
    "pages",
    "media",
    "users",
    "taxonomy",
    "comments",
    "site",
    "plugins",
    "seo",
    "custom_types",
    "commerce",
)
COMPANION_GROUP = "companion"

TOOL_MODULES = (
    "core.tools.posts",
    "core.tools.pages",
    "core.tools.media",
    "core.tools.users",
    "core.tools.taxonomy",
    "core.tools.comments",
    "core.tools.site",
    "core.tools.plugins",
    "core.tools.seo",
    "core.tools.custom_types",
    "core.tools.commerce",
    "core.tools.files",
)


# ==================== Envelope ====================

@dataclass
class ToolResult:
    """Uniform answer of every tool call."""
    success: bool
    message: str = ""
    data: Any = None

    def to_dict(self) -> dict:
        if self.success:
            return {"success": True, "message": self.message, "data": self.data}
        return {"success": False, "error": self.message}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, default=str)


def success(data: Any = None, message: str = "") -> ToolResult:
    return ToolResult(success=True, message=message, data=data)


def error(message: str) -> ToolResult:
    return ToolResult(success=False, message=message)


# ==================== Parameters ====================

class ParamKind(str, Enum):
    """Primitive type of a tool parameter."""
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    ANY = "any"


def kind_for(annotation: Any) -> ParamKind:
    """Map a type hint onto a ParamKind. Optional[X] maps like X."""
    if annotation is inspect.Parameter.empty or annotation is Any:
        return ParamKind.ANY

    origin = typing.get_origin(annotation)
    if origin in (typing.Union, types.UnionType):
        kinds = {kind_for(a) for a in typing.get_args(annotation) if a is not type(None)}
        return kinds.pop() if len(kinds) == 1 else ParamKind.ANY

    base = origin or annotation
    if base is bool:
        return ParamKind.BOOLEAN
    if base in (int, float):
        return ParamKind.NUMBER
    if base is str:
        return ParamKind.STRING
    if base in (list, tuple):
        return ParamKind.ARRAY
    if base is dict:
        return ParamKind.OBJECT
    return ParamKind.ANY


@dataclass
class Param:
    """Descriptor of one tool parameter."""
    name: str
    kind: ParamKind
    required: bool = True
    default: Any = None
    description: str = ""

    def coerce(self, value: Any) -> Any:
        """Return value converted to this parameter's kind, or raise ValueError."""
        if self.kind is ParamKind.ANY:
            return value

        if self.kind is ParamKind.NUMBER:
            if isinstance(value, bool):
                raise ValueError(f"Parameter '{self.name}' must be a number")
            if isinstance(value, (int, float)):
                return value
            if isinstance(value, str):
                try:
                    return int(value)
                except ValueError:
                    try:
                        return float(value)
                    except ValueError:
                        pass
            raise ValueError(f"Parameter '{self.name}' must be a number")

        if self.kind is ParamKind.BOOLEAN:
            if isinstance(value, bool):
                return value
            if isinstance(value, str) and value.lower() in ("true", "false"):
                return value.lower() == "true"
            raise ValueError(f"Parameter '{self.name}' must be a boolean")

        if self.kind is ParamKind.STRING:
            if isinstance(value, str):
                return value
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return str(value)
            raise ValueError(f"Parameter '{self.name}' must be a string")

        if self.kind is ParamKind.ARRAY:
            if isinstance(value, (list, tuple)):
                return list(value)
            raise ValueError(f"Parameter '{self.name}' must be an array")

        if isinstance(value, dict):
            return value
        raise ValueError(f"Parameter '{self.name}' must be an object")

    def to_dict(self) -> dict:
        d = {"name": self.name, "kind": self.kind.value, "required": self.required}
        if not self.required:
            d["default"] = self.default
        if self.description:
            d["description"] = self.description
        return d


def params_for(func: Callable, docs: dict[str, str] | None = None) -> list[Param]:
    """Parameter descriptors from a handler signature, skipping the client argument."""
    docs = docs or {}
    hints = typing.get_type_hints(func)
    params = list(inspect.signature(func).parameters.values())[1:]
    undocumented = set(docs) - {p.name for p in params}
    if undocumented:
        raise ValueError(f"{func.__name__}: described parameters not in signature: {sorted(undocumented)}")

    result = []
    for p in params:
        if p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        required = p.default is inspect.Parameter.empty
        result.append(Param(
            name=p.name,
            kind=kind_for(hints.get(p.name, p.annotation)),
            required=required,
            default=None if required else p.default,
            description=docs.get(p.name, ""),
        ))
    return result


# ==================== Catalog ====================

@dataclass
class ToolSpec:
    name: str
    description: str
    action: str  # used in failure messages: "Failed to {action}: ..."
    group: str
    handler: Callable
    params: list[Param] = field(default_factory=list)

    def describe(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "group": self.group,
            "params": [p.to_dict() for p in self.params],
        }


_catalog: dict[str, ToolSpec] = {}


def tool(name: str, description: str, action: str, group: str, parameters: dict[str, str] | None = None):
    """Decorator to declare a coroutine as a tool.

    ``parameters`` maps argument names to the description shown to the agent.
    """
    def decorator(func: Callable):
        if name in _catalog:
            raise ValueError(f"Tool already declared: {name}")
        _catalog[name] = ToolSpec(
            name=name,
            description=description,
            action=action,
            group=group,
            handler=func,
            params=params_for(func, parameters),
        )
        return func
    return decorator


def load_catalog() -> dict[str, ToolSpec]:
    """Import every tool module so their @tool declarations run."""
    for module in TOOL_MODULES:
        importlib.import_module(module)
    return _catalog


def bind_arguments(spec: ToolSpec, args: dict) -> dict:
    """Validate raw arguments against the descriptors and build handler kwargs.

    None counts as absent, so optional parameters fall back to their defaults.
    """
    known = {p.name for p in spec.params}
    unknown = sorted(set(args) - known)
    if unknown:
        raise ValueError(f"Unknown parameter(s): {', '.join(unknown)}")

    missing = [p.name for p in spec.params if p.required and args.get(p.name) is None]
    if missing:
        raise ValueError(f"Missing required parameter(s): {', '.join(missing)}")

    kwargs = {}
    for p in spec.params:
        value = args.get(p.name)
        if value is None:
            continue
        kwargs[p.name] = p.coerce(value)
    return kwargs


# ==================== Registry ====================

class ToolRegistry:
    """Tools bound to one WordPressClient."""

    def __init__(self, client):
        self.client = client
        self._tools: dict[str, ToolSpec] = {}

    def include(self, *groups: str) -> int:
        """Bind every declared tool of the given groups. Returns how many were added."""
        added = 0
        for spec in load_catalog().values():
            if spec.group in groups and spec.name not in self._tools:
                self._tools[spec.name] = spec
                added += 1
        return added

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def specs(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def count_by_group(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for spec in self._tools.values():
            counts[spec.group] = counts.get(spec.group, 0) + 1
        return counts

    def describe(self) -> list[dict]:
        return [spec.describe() for spec in self._tools.values()]

    async def execute(self, name: str, args: dict | None = None) -> ToolResult:
        """Run a tool. Never raises: every failure becomes an error envelope."""
        spec = self._tools.get(name)
        if spec is None:
            return error(f"Unknown tool: {name}")

        try:
            kwargs = bind_arguments(spec, args or {})
        except ValueError as e:
            return error(f"Invalid arguments for {name}: {e}")

        logger.info(f"Executing tool: {name} ({', '.join(kwargs) or 'no args'})")
        try:
            result = await spec.handler(self.client, **kwargs)
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}")
            return error(f"Failed to {spec.action}: {e}")

        if not isinstance(result, ToolResult):
            result = success(result)
        return result
