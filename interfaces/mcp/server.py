"""WordPress MCP Server - exposes a WordPress site, its WooCommerce store and the
companion plugin to Claude Code / Claude Desktop over stdio."""

import asyncio
import inspect
import logging
import sys
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from config.settings import Settings, settings
from core.tools.registry import COMPANION_GROUP, CORE_GROUPS, ParamKind, ToolRegistry, ToolSpec
from integrations.wordpress import CompanionStatus, WordPressClient

logger = logging.getLogger("wordpress-mcp")

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

INSTRUCTIONS = (
    "Tools for managing a WordPress site: posts, pages, media, users, categories, tags, "
    "comments, settings, plugins, themes, SEO metadata, custom post types and WooCommerce "
    "products. When the companion plugin is installed, file and server maintenance tools "
    "are available too. Every tool answers with JSON: {success, message, data} or {success: false, error}."
)


def tool_runner(registry: ToolRegistry, spec: ToolSpec):
    """FastMCP-facing coroutine for one tool.

    Every parameter is advertised as optional ``Any`` carrying its JSON type
    and description, so FastMCP passes arguments through untouched and the
    registry does all validation. The answer is the envelope as JSON text.
    """
    async def run(**kwargs) -> str:
        result = await registry.execute(spec.name, kwargs)
        return result.to_json()

    parameters = []
    for param in spec.params:
        extra = {}
        if param.kind is not ParamKind.ANY:
            extra["type"] = param.kind.value
        if not param.required:
            extra["default"] = param.default
        field = Field(description=param.description or None, json_schema_extra=extra or None)
        parameters.append(inspect.Parameter(
            param.name,
            inspect.Parameter.KEYWORD_ONLY,
            default=None,
            annotation=Annotated[Any, field],
        ))

    run.__signature__ = inspect.Signature(parameters)
    run.__name__ = spec.name
    run.__doc__ = spec.description
    return run


def mark_required(schema: dict, spec: ToolSpec) -> None:
    """Restore the required list the permissive runner signature hides."""
    required = [p.name for p in spec.params if p.required]
    properties = schema.get("properties", {})
    for name in required:
        properties.get(name, {}).pop("default", None)
    if required:
        schema["required"] = required
    else:
        schema.pop("required", None)


def mount(mcp: FastMCP, registry: ToolRegistry) -> None:
    for spec in registry.specs():
        mcp.add_tool(tool_runner(registry, spec), name=spec.name, description=spec.description)
        mark_required(mcp._tool_manager.get_tool(spec.name).parameters, spec)


def log_banner(config: Settings, status: CompanionStatus, registry: ToolRegistry) -> None:
    logger.info("=" * 60)
    logger.info(f"WordPress MCP server for {config.wordpress_url}")
    logger.info(f"Companion plugin: {status.message}")
    for group, count in registry.count_by_group().items():
        logger.info(f"  {group:<14} {count:>3} tools")
    logger.info(f"Total: {len(registry)} tools")
    logger.info("=" * 60)


async def build_server(
    config: Settings,
    client: WordPressClient | None = None,
) -> tuple[FastMCP, ToolRegistry, CompanionStatus]:
    """Probe the companion plugin, bind the tool groups and mount them on a FastMCP server."""
    client = client or WordPressClient(config)

    status = await client.probe_companion()
    if status.available:
        logger.info(status.message)
    else:
        logger.warning(status.message)

    registry = ToolRegistry(client)
    registry.include(*CORE_GROUPS)
    if status.available:
        registry.include(COMPANION_GROUP)

    mcp = FastMCP("WordPress", instructions=INSTRUCTIONS)
    mount(mcp, registry)
    log_banner(config, status, registry)
    return mcp, registry, status


def main():
    # stdout carries the MCP stdio transport
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT, stream=sys.stderr)
    settings.ensure_valid()
    mcp, _, _ = asyncio.run(build_server(settings))
    mcp.run()


if __name__ == "__main__":
    main()
