"""
Environment Variable Display Utility
"""
import os
from typing import Dict, Any

from client.llm_backend import DEFAULT_MAX_OUTPUT_TOKENS, LLMBackendManager


def get_env_display() -> Dict[str, Any]:
    """
    Get current environment variable values for display.
    Masks sensitive tokens.

    Returns:
        Dictionary with categorized env vars
    """

    def mask_token(value: str) -> str:
        """Mask token but handle empty/None"""
        if not value:
            return "(not set)"
        return "*" * len(value)

    env_vars = {
        "llm": {
            "LLM_BACKEND": LLMBackendManager.get_backend_type(),
            "OPENAI_API_KEY": mask_token(os.getenv("OPENAI_API_KEY")),
            "OPENAI_MODEL": os.getenv("OPENAI_MODEL") or "(not set)",
            "OPENAI_BASE_URL": os.getenv("OPENAI_BASE_URL") or "(not set)",
            "OLLAMA_MODEL": os.getenv("OLLAMA_MODEL") or "(not set)",
            "LSAI_MAX_OUTPUT_TOKENS": os.getenv("LSAI_MAX_OUTPUT_TOKENS") or str(DEFAULT_MAX_OUTPUT_TOKENS)
        },
        "output": {
            "LSAI_RESPONSE_LANGUAGE": os.getenv("LSAI_RESPONSE_LANGUAGE") or "(not set)",
            "LSAI_LOG_DIR": os.getenv("LSAI_LOG_DIR") or "(not set)"
        },
        "mcp": {
            "DISABLED_TOOLS": os.getenv("DISABLED_TOOLS") or "(not set)"
        }
    }

    return env_vars


def format_env_display() -> str:
    """Format environment variables for terminal display"""
    env_vars = get_env_display()

    output = []
    output.append("📋 ENVIRONMENT CONFIGURATION")
    output.append("=" * 50)

    output.append("\n🤖 Language Model:")
    for key, value in env_vars["llm"].items():
        output.append(f"   {key}: {value}")

    output.append("\n📝 Output:")
    for key, value in env_vars["output"].items():
        output.append(f"   {key}: {value}")

    output.append("\n🛠  MCP Server:")
    output.append(f"   DISABLED_TOOLS: {env_vars['mcp']['DISABLED_TOOLS']}")

    output.append("\n" + "=" * 50)

    return "\n".join(output)
