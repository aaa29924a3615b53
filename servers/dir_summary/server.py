"""
Directory Summary MCP Server
Runs over stdio transport
"""
import sys
import json
import logging
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv
load_dotenv(PROJECT_ROOT / ".env", override=True)

from mcp.server.fastmcp import FastMCP

from client.assessment import Focus, assess_summary
from client.logging_setup import setup_logging
from tools.tool_control import check_tool_enabled
from tools.dir_summary.build_summary import build_summary, summary_to_dict, summary_to_json
from tools.dir_summary.collect_dir import collect_dir
from tools.dir_summary.models import FilesystemError

logger = logging.getLogger("mcp_dir_summary_server")

mcp = FastMCP("dir-summary-server")


@mcp.tool()
@check_tool_enabled(category="dir_summary")
def summarize_directory(path: str = ".", pretty: bool = True, skip_unreadable: bool = False) -> str:
    """
    Summarize the immediate contents of a directory (non-recursive).

    Args:
        path (str, optional): Directory to inspect (default: current directory)
        pretty (bool, optional): Indent the JSON output (default: True)
        skip_unreadable (bool, optional): Skip entries whose metadata cannot be read

    Returns:
        JSON string with:
        - path: The path as given
        - counts: total, files, dirs, hidden
        - language_hints: extension -> file count, sorted by extension
        - notable_files: has_git, has_readme, has_license, has_dockerfile,
          has_ci, has_rust, has_node, has_python
        - suspicious_files: names that look like secrets, logs or dumps
        - top_file_by_size: up to 5 largest files
        - skipped: entries left out (only with skip_unreadable)
        - error: Error message if the directory cannot be read

    Use when user wants to:
    - Know what kind of project a directory holds
    - Spot secret-looking or dumped files at a glance
    """
    logger.info(f"🛠 [server] summarize_directory called with path: {path}")

    skipped = []
    try:
        entries = collect_dir(path, tolerant=skip_unreadable, skipped=skipped)
    except FilesystemError as e:
        logger.error(f"❌ summarize_directory failed: {e}")
        return json.dumps({"error": str(e), "path": path}, indent=2)

    summary = build_summary(path, entries)

    if skip_unreadable:
        data = summary_to_dict(summary)
        data["skipped"] = [{"name": s.name, "reason": s.reason} for s in skipped]
        return json.dumps(data, indent=2 if pretty else None, ensure_ascii=False)

    return summary_to_json(summary, pretty=pretty)


@mcp.tool()
@check_tool_enabled(category="dir_summary")
async def assess_directory(path: str = ".", focus: str = "normal", detail: bool = False) -> str:
    """
    Summarize a directory and ask the configured language model to assess it.

    Args:
        path (str, optional): Directory to inspect (default: current directory)
        focus (str, optional): "normal", "security" or "structure" (default: "normal")
        detail (bool, optional): Send the summary to the model as indented JSON

    Returns:
        Natural-language assessment: probable project type, good points,
        concerns and next actions. JSON error object on failure.
    """
    logger.info(f"🛠 [server] assess_directory called with path: {path}, focus: {focus}")

    try:
        focus_value = Focus.parse(focus)
        entries = collect_dir(path)
        summary = build_summary(path, entries)
        return await assess_summary(summary, focus_value, detail=detail)
    except Exception as e:
        logger.error(f"❌ assess_directory failed: {e}", exc_info=True)
        return json.dumps({
            "error": f"Assessment failed: {e}",
            "path": path
        }, indent=2)


if __name__ == "__main__":
    setup_logging("mcp-server.log")
    logging.getLogger("mcp").setLevel(logging.DEBUG)
    logger.info("🚀 Directory summary server starting over stdio")
    mcp.run(transport="stdio")
