"""Companion plugin tools - file operations and server maintenance on the WordPress host.

Registered only when the companion plugin answers the startup probe. Every
tool is a POST (server_info is a GET) to the plugin's REST namespace.
"""

import json
import logging
from typing import Any

from core.tools.registry import COMPANION_GROUP, ToolResult, error, success, tool
from integrations.wordpress import WordPressClient

logger = logging.getLogger(__name__)


def _body(**fields) -> dict:
    """Request body without the arguments that were not given."""
    return {k: v for k, v in fields.items() if v is not None}


def _pick(result: dict, *keys: str) -> dict:
    return {k: result.get(k) for k in keys}


def _preview(value: Any, length: int = 100) -> str:
    return json.dumps(value, default=str)[:length]


# ==================== Files ====================

@tool(
    name="banildtools_read_file",
    description="Read a file on the WordPress server. Supports line offset and limit; images come back base64 encoded.",
    action="read file",
    group=COMPANION_GROUP,
    parameters={
        "target_file": "Path relative to the WordPress root",
        "offset": "First line to return",
        "limit": "Maximum number of lines",
    },
)
async def read_file(wp: WordPressClient, target_file: str, offset: int | None = None, limit: int | None = None) -> ToolResult:
    result = await wp.call_companion_api("/read", body=_body(target_file=target_file, offset=offset, limit=limit))
    data = _pick(
        result, "path", "contents", "size", "total_lines", "mime_type", "is_binary", "is_image", "contents_base64",
    )
    return success(data, f"Read file: {result.get('path')}")


@tool(
    name="banildtools_write_file",
    description="Create or overwrite a file on the WordPress server. Parent directories are created.",
    action="write file",
    group=COMPANION_GROUP,
    parameters={"file_path": "Path relative to the WordPress root", "contents": "New file contents"},
)
async def write_file(wp: WordPressClient, file_path: str, contents: str) -> ToolResult:
    result = await wp.call_companion_api("/write", body={"file_path": file_path, "contents": contents})
    return success(
        _pick(result, "path", "bytes_written"),
        f"Wrote {result.get('bytes_written')} bytes to {result.get('path')}",
    )


@tool(
    name="banildtools_edit_file",
    description=(
        "Search and replace text in a file. Replaces only the first unique match "
        "unless replace_all is true."
    ),
    action="edit file",
    group=COMPANION_GROUP,
    parameters={
        "file_path": "Path relative to the WordPress root",
        "old_string": "Text to find",
        "new_string": "Replacement text",
        "replace_all": "Replace every occurrence (default false)",
    },
)
async def edit_file(
    wp: WordPressClient,
    file_path: str,
    old_string: str,
    new_string: str,
    replace_all: bool = False,
) -> ToolResult:
    result = await wp.call_companion_api("/edit", body={
        "file_path": file_path,
        "old_string": old_string,
        "new_string": new_string,
        "replace_all": replace_all,
    })
    return success(
        _pick(result, "path", "replacements", "bytes_written"),
        f"Replaced {result.get('replacements')} occurrence(s) in {result.get('path')}",
    )


@tool(
    name="banildtools_delete_file",
    description=(
        "Delete a file or directory (recursively) on the WordPress server. "
        "Needs delete permission enabled in the plugin settings."
    ),
    action="delete file",
    group=COMPANION_GROUP,
    parameters={"target_file": "Path relative to the WordPress root"},
)
async def delete_file(wp: WordPressClient, target_file: str) -> ToolResult:
    result = await wp.call_companion_api("/delete", body={"target_file": target_file})
    return success({"path": result.get("path"), "deleted": True}, f"Deleted: {result.get('path')}")


@tool(
    name="banildtools_list_dir",
    description="List a directory on the WordPress server, with file metadata and optional ignore globs.",
    action="list directory",
    group=COMPANION_GROUP,
    parameters={"target_directory": "Directory relative to the WordPress root", "ignore_globs": "Glob patterns to skip"},
)
async def list_dir(wp: WordPressClient, target_directory: str, ignore_globs: list | None = None) -> ToolResult:
    result = await wp.call_companion_api("/list", body={
        "target_directory": target_directory,
        "ignore_globs": ignore_globs or [],
    })
    return success(
        _pick(result, "path", "total_items", "items"),
        f"Listed {result.get('total_items')} items in {result.get('path')}",
    )


@tool(
    name="banildtools_grep",
    description=(
        "Search file contents with a regex. Supports a file glob filter, context lines "
        "and the output modes content, files_with_matches and count."
    ),
    action="search files",
    group=COMPANION_GROUP,
    parameters={
        "pattern": "Regular expression",
        "path": "Directory to search in",
        "glob": "Only files matching this glob",
        "case_insensitive": "Ignore case (default false)",
        "context_lines": "Lines of context around matches (default 0)",
        "output_mode": "content, files_with_matches or count (default content)",
        "max_results": "Maximum number of results (default 500)",
    },
)
async def grep(
    wp: WordPressClient,
    pattern: str,
    path: str | None = None,
    glob: str | None = None,
    case_insensitive: bool = False,
    context_lines: int = 0,
    output_mode: str = "content",
    max_results: int = 500,
) -> ToolResult:
    result = await wp.call_companion_api("/search", body=_body(
        pattern=pattern,
        path=path,
        glob=glob,
        case_insensitive=case_insensitive,
        context_lines=context_lines,
        output_mode=output_mode,
        max_results=max_results,
    ))
    data = _pick(
        result, "pattern", "path", "output_mode", "files_searched", "files_with_matches",
        "total_matches", "truncated", "results",
    )
    return success(
        data,
        f"Found {result.get('total_matches')} matches in {result.get('files_with_matches')} files",
    )


@tool(
    name="banildtools_glob_search",
    description="Find files matching a glob pattern, newest first.",
    action="glob search",
    group=COMPANION_GROUP,
    parameters={"glob_pattern": "Glob pattern, e.g. **/*.php", "target_directory": "Directory to search in"},
)
async def glob_search(wp: WordPressClient, glob_pattern: str, target_directory: str | None = None) -> ToolResult:
    result = await wp.call_companion_api("/glob", body=_body(glob_pattern=glob_pattern, target_directory=target_directory))
    return success(
        _pick(result, "pattern", "directory", "total_files", "files"),
        f"Found {result.get('total_files')} files matching {result.get('pattern')}",
    )


@tool(
    name="banildtools_mkdir",
    description="Create a directory on the WordPress server (parents included by default).",
    action="create directory",
    group=COMPANION_GROUP,
    parameters={"path": "Directory relative to the WordPress root", "recursive": "Create parent directories (default true)"},
)
async def mkdir(wp: WordPressClient, path: str, recursive: bool = True) -> ToolResult:
    result = await wp.call_companion_api("/mkdir", body={"path": path, "recursive": recursive})
    return success({"path": result.get("path")}, f"Created directory: {result.get('path')}")


@tool(
    name="banildtools_rename",
    description="Rename or move a file or directory on the WordPress server.",
    action="rename",
    group=COMPANION_GROUP,
    parameters={"source": "Current path", "destination": "New path"},
)
async def rename(wp: WordPressClient, source: str, destination: str) -> ToolResult:
    result = await wp.call_companion_api("/rename", body={"source": source, "destination": destination})
    return success(
        _pick(result, "source", "destination"),
        f"Renamed {result.get('source')} -> {result.get('destination')}",
    )


@tool(
    name="banildtools_copy",
    description="Copy a file or directory (recursively) on the WordPress server.",
    action="copy",
    group=COMPANION_GROUP,
    parameters={"source": "Path to copy", "destination": "Target path"},
)
async def copy(wp: WordPressClient, source: str, destination: str) -> ToolResult:
    result = await wp.call_companion_api("/copy", body={"source": source, "destination": destination})
    return success(
        _pick(result, "source", "destination"),
        f"Copied {result.get('source')} -> {result.get('destination')}",
    )


@tool(
    name="banildtools_file_info",
    description="Get size, permissions, modification date and line count of a file or directory.",
    action="get file info",
    group=COMPANION_GROUP,
    parameters={"path": "Path relative to the WordPress root"},
)
async def file_info(wp: WordPressClient, path: str) -> ToolResult:
    result = await wp.call_companion_api("/info", body={"path": path})
    info = result.get("info") or {}
    return success(info, f"Info for: {info.get('path', path)}")


@tool(
    name="banildtools_append_file",
    description="Append to the end of a file. Useful to write large files in chunks.",
    action="append to file",
    group=COMPANION_GROUP,
    parameters={"file_path": "Path relative to the WordPress root", "contents": "Text to append"},
)
async def append_file(wp: WordPressClient, file_path: str, contents: str) -> ToolResult:
    result = await wp.call_companion_api("/append", body={"file_path": file_path, "contents": contents})
    return success(
        _pick(result, "path", "bytes_appended"),
        f"Appended {result.get('bytes_appended')} bytes to {result.get('path')}",
    )


# ==================== Options & transients ====================

@tool(
    name="banildtools_get_option",
    description="Get a WordPress option value by name.",
    action="get option",
    group=COMPANION_GROUP,
    parameters={"name": "Option name"},
)
async def get_option(wp: WordPressClient, name: str) -> ToolResult:
    result = await wp.call_companion_api("/option/get", body={"name": name})
    shown = _preview(result.get("value")) if result.get("exists") else "(not set)"
    return success(_pick(result, "name", "value", "exists"), f'Option "{name}": {shown}')


@tool(
    name="banildtools_set_option",
    description="Set a WordPress option value.",
    action="set option",
    group=COMPANION_GROUP,
    parameters={"name": "Option name", "value": "New value (any JSON value)"},
)
async def set_option(wp: WordPressClient, name: str, value: Any = None) -> ToolResult:
    result = await wp.call_companion_api("/option/set", body={"name": name, "value": value})
    verb = "updated" if result.get("updated") else "set"
    return success(_pick(result, "name", "updated"), f'Option "{name}" {verb}')


@tool(
    name="banildtools_delete_option",
    description="Delete a WordPress option.",
    action="delete option",
    group=COMPANION_GROUP,
    parameters={"name": "Option name"},
)
async def delete_option(wp: WordPressClient, name: str) -> ToolResult:
    result = await wp.call_companion_api("/option/delete", body={"name": name})
    outcome = "deleted" if result.get("deleted") else "was not found"
    return success(_pick(result, "name", "deleted"), f'Option "{name}" {outcome}')


@tool(
    name="banildtools_get_transient",
    description="Get a WordPress transient value.",
    action="get transient",
    group=COMPANION_GROUP,
    parameters={"name": "Transient name"},
)
async def get_transient(wp: WordPressClient, name: str) -> ToolResult:
    result = await wp.call_companion_api("/transient/get", body={"name": name})
    shown = _preview(result.get("value")) if result.get("exists") else "(not set)"
    return success(_pick(result, "name", "value", "exists"), f'Transient "{name}": {shown}')


@tool(
    name="banildtools_set_transient",
    description="Set a WordPress transient with an expiration time in seconds.",
    action="set transient",
    group=COMPANION_GROUP,
    parameters={
        "name": "Transient name",
        "value": "Value (any JSON value)",
        "expiration": "Lifetime in seconds, 0 for no expiry (default 0)",
    },
)
async def set_transient(wp: WordPressClient, name: str, value: Any = None, expiration: int = 0) -> ToolResult:
    result = await wp.call_companion_api("/transient/set", body={"name": name, "value": value, "expiration": expiration})
    suffix = f" (expires in {expiration}s)" if expiration else ""
    return success(_pick(result, "name", "set", "expiration"), f'Transient "{name}" set{suffix}')


@tool(
    name="banildtools_delete_transient",
    description="Delete a WordPress transient.",
    action="delete transient",
    group=COMPANION_GROUP,
    parameters={"name": "Transient name"},
)
async def delete_transient(wp: WordPressClient, name: str) -> ToolResult:
    result = await wp.call_companion_api("/transient/delete", body={"name": name})
    outcome = "deleted" if result.get("deleted") else "was not found"
    return success(_pick(result, "name", "deleted"), f'Transient "{name}" {outcome}')


# ==================== Maintenance ====================

@tool(
    name="banildtools_debug_log",
    description="Read, tail or clear the WordPress debug.log file.",
    action="access debug log",
    group=COMPANION_GROUP,
    parameters={"action": "read, tail or clear (default tail)", "lines": "Number of lines for tail (default 100)"},
)
async def debug_log(wp: WordPressClient, action: str = "tail", lines: int = 100) -> ToolResult:
    result = await wp.call_companion_api("/debug-log", body={"action": action, "lines": lines})
    if action == "clear":
        cleared = result.get("cleared")
        return success({"cleared": cleared}, f"Debug log {'cleared' if cleared else 'could not be cleared'}")

    summary = f"{result.get('lines_returned')} lines" if result.get("exists") else "not found"
    return success(
        _pick(result, "path", "exists", "size", "content", "lines_returned"),
        f"Debug log: {summary}",
    )


@tool(
    name="banildtools_php_lint",
    description="Check PHP syntax. Give either a file_path or a code string.",
    action="lint PHP",
    group=COMPANION_GROUP,
    parameters={"file_path": "PHP file relative to the WordPress root", "code": "PHP source code"},
)
async def php_lint(wp: WordPressClient, file_path: str = "", code: str = "") -> ToolResult:
    if not file_path and not code:
        return error("Provide either file_path or code")
    payload = {}
    if file_path:
        payload["file_path"] = file_path
    if code:
        payload["code"] = code
    result = await wp.call_companion_api("/php-lint", body=payload)
    if result.get("valid"):
        message = "PHP syntax valid"
    else:
        message = f"PHP errors: {len(result.get('errors') or [])}"
    return success(_pick(result, "valid", "errors", "file_path"), message)


@tool(
    name="banildtools_clear_cache",
    description="Clear WordPress caches (object cache, transients, rewrite rules, page cache).",
    action="clear cache",
    group=COMPANION_GROUP,
    parameters={"type": "all, object, transients, rewrite or page (default all)"},
)
async def clear_cache(wp: WordPressClient, type: str = "all") -> ToolResult:
    result = await wp.call_companion_api("/clear-cache", body={"type": type})
    logger.info(f"Cleared {result.get('type')} cache")
    return success(_pick(result, "type", "cleared", "details"), f"Cache cleared: {result.get('type')}")


@tool(
    name="banildtools_server_info",
    description="Get server information: PHP, WordPress, database, disk.",
    action="get server info",
    group=COMPANION_GROUP,
)
async def server_info(wp: WordPressClient) -> ToolResult:
    result = await wp.call_companion_api("/server-info", "GET")
    php = (result.get("php") or {}).get("version") or "?"
    wordpress = (result.get("wordpress") or {}).get("version") or "?"
    return success(result, f"Server: PHP {php}, WP {wordpress}")


@tool(
    name="banildtools_db_query",
    description="Run a read-only SELECT query against the WordPress database.",
    action="execute query",
    group=COMPANION_GROUP,
    parameters={"query": "SELECT statement", "limit": "Maximum rows (default 100)"},
)
async def db_query(wp: WordPressClient, query: str, limit: int = 100) -> ToolResult:
    result = await wp.call_companion_api("/db-query", body={"query": query, "limit": limit})
    return success(
        _pick(result, "query", "rows", "row_count", "columns"),
        f"Query returned {result.get('row_count')} rows",
    )
