"""
Tool Disabling Helper for the MCP Server
========================================

Lets an operator switch off MCP tools through an environment variable.

Setup in .env:
    # Disable individual tools
    DISABLED_TOOLS=assess_directory

    # Or a whole category / one tool of a category
    DISABLED_TOOLS=dir_summary:*
    DISABLED_TOOLS=dir_summary:assess_directory

Usage in server:
    from tools.tool_control import check_tool_enabled

    @mcp.tool()
    @check_tool_enabled(category="dir_summary")
    def summarize_directory(path: str = ".") -> str:
        return do_work(path)
"""

import os
import json
import inspect
import logging
from functools import wraps
from typing import Callable, Dict, List, Optional, Set, Union

logger = logging.getLogger(__name__)

_DISABLED_TOOLS_RAW = ""
_DISABLED_TOOLS: Set[str] = set()
_DISABLED_CATEGORIES: Dict[str, Union[str, List[str]]] = {}


def reload_disabled_tools(raw: Optional[str] = None):
    """
    (Re)parse the disabled tool list.

    Args:
        raw: Comma separated rules; defaults to the DISABLED_TOOLS environment variable
    """
    global _DISABLED_TOOLS_RAW, _DISABLED_TOOLS, _DISABLED_CATEGORIES

    _DISABLED_TOOLS_RAW = os.getenv("DISABLED_TOOLS", "") if raw is None else raw
    _DISABLED_TOOLS = set()
    _DISABLED_CATEGORIES = {}

    items = [item.strip() for item in _DISABLED_TOOLS_RAW.split(",") if item.strip()]

    for item in items:
        if ":" in item:
            category, tool = item.split(":", 1)
            if tool == "*":
                _DISABLED_CATEGORIES[category] = "*"
            else:
                rules = _DISABLED_CATEGORIES.setdefault(category, [])
                if isinstance(rules, list):
                    rules.append(tool)
        else:
            _DISABLED_TOOLS.add(item)

    if _DISABLED_TOOLS or _DISABLED_CATEGORIES:
        logger.info("🚫 Tool disabling active:")
        if _DISABLED_TOOLS:
            logger.info(f"   Disabled tools: {', '.join(sorted(_DISABLED_TOOLS))}")
        for cat, tools in _DISABLED_CATEGORIES.items():
            if tools == "*":
                logger.info(f"   Disabled category: {cat}:* (all tools)")
            else:
                logger.info(f"   Disabled {cat}: {', '.join(tools)}")


# Parse on module load
reload_disabled_tools()


def is_tool_enabled(tool_name: str, category: Optional[str] = None) -> bool:
    """
    Check if a tool is enabled.

    Args:
        tool_name: Name of the tool to check
        category: Optional category (e.g., "dir_summary")

    Returns:
        True if tool is enabled, False if disabled
    """
    if tool_name in _DISABLED_TOOLS:
        return False

    if category and category in _DISABLED_CATEGORIES:
        cat_rules = _DISABLED_CATEGORIES[category]
        if cat_rules == "*" or tool_name in cat_rules:
            return False

    return True


def disabled_tool_response(tool_name: str, reason: Optional[str] = None) -> str:
    """Standard JSON response for a disabled tool"""
    default_reason = f"Tool '{tool_name}' is currently disabled via DISABLED_TOOLS configuration"

    return json.dumps({
        "error": reason or default_reason,
        "tool": tool_name,
        "disabled": True,
        "message": "This tool has been disabled by the administrator. Check DISABLED_TOOLS environment variable."
    }, indent=2)


def check_tool_enabled(func: Callable = None, *, category: Optional[str] = None):
    """
    Decorator returning the disabled-tool response instead of running a disabled tool.

    Works with plain and async functions, with or without a category:

        @check_tool_enabled
        @check_tool_enabled(category="dir_summary")
    """

    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            tool_name = f.__name__

            if not is_tool_enabled(tool_name, category):
                logger.warning(f"🚫 Tool '{tool_name}' called but is disabled")
                return disabled_tool_response(tool_name)

            return f(*args, **kwargs)

        @wraps(f)
        async def async_wrapper(*args, **kwargs):
            tool_name = f.__name__

            if not is_tool_enabled(tool_name, category):
                logger.warning(f"🚫 Tool '{tool_name}' called but is disabled")
                return disabled_tool_response(tool_name)

            return await f(*args, **kwargs)

        if inspect.iscoroutinefunction(f):
            return async_wrapper
        return wrapper

    if func is None:
        return decorator
    return decorator(func)


def get_disabled_tools() -> dict:
    """Disabled tools and categories as currently parsed"""
    return {
        "tools": sorted(_DISABLED_TOOLS),
        "categories": dict(_DISABLED_CATEGORIES),
        "raw": _DISABLED_TOOLS_RAW
    }


__all__ = [
    'reload_disabled_tools',
    'is_tool_enabled',
    'disabled_tool_response',
    'check_tool_enabled',
    'get_disabled_tools'
]
