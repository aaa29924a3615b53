"""
Directory Assessment
Turns a DirectorySummary into a prompt and asks the chat model for an assessment
"""

import os
import logging
from enum import Enum
from typing import Any, Optional

from langchain_core.messages import HumanMessage, SystemMessage

from client.llm_backend import LLMBackendManager
from tools.dir_summary.models import DirectorySummary
from tools.dir_summary.build_summary import summary_to_json

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_LANGUAGE = "English"

SYSTEM_PROMPT = "You review directory summaries and answer concisely."

PROMPT_TEMPLATE = """You are an experienced software engineer.
From the directory summary (JSON) below, infer what kind of project this directory is,
then briefly list its good points, its concerns (security and structure in particular)
and the next actions to take. Answer in {language}.

# focus: {focus}

# summary(JSON)
{summary_json}
"""


class AssessmentError(RuntimeError):
    """Raised when the model returns no usable text"""


class Focus(Enum):
    """What the assessment should pay most attention to"""
    NORMAL = "normal"
    SECURITY = "security"
    STRUCTURE = "structure"

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: str) -> "Focus":
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown focus: {value!r} (choose from {choices})")


def get_response_language() -> str:
    return os.getenv("LSAI_RESPONSE_LANGUAGE", "").strip() or DEFAULT_RESPONSE_LANGUAGE


def build_prompt(summary_json: str, focus: Focus, language: Optional[str] = None) -> str:
    return PROMPT_TEMPLATE.format(
        language=language or get_response_language(),
        focus=focus.label,
        summary_json=summary_json,
    )


def extract_text(response: Any) -> str:
    """
    Pull the answer text out of a chat model response.

    String content is returned as is. Block content (Responses API)
    is concatenated from its "text" blocks; reasoning blocks are ignored.

    Raises:
        AssessmentError: If no text can be found
    """
    content = response.content if hasattr(response, "content") else response

    if isinstance(content, str):
        text = content
    elif isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text") or "")
        text = "".join(parts)
    else:
        text = ""

    if not text.strip():
        raise AssessmentError(f"Failed to extract model output: {content!r}")
    return text


async def assess_summary(summary: DirectorySummary,
                         focus: Focus = Focus.NORMAL,
                         detail: bool = False,
                         llm=None,
                         model_name: Optional[str] = None) -> str:
    """
    Ask the chat model to assess a directory summary.

    Args:
        summary: Summary to assess
        focus: Assessment focus
        detail: Embed the summary as indented JSON instead of compact JSON
        llm: Chat model to use; created through LLMBackendManager when None
        model_name: Model override used when the chat model is created here

    Returns:
        The assessment text

    Raises:
        ValueError: If the LLM backend is misconfigured
        AssessmentError: If the model output has no text
    """
    summary_json = summary_to_json(summary, pretty=detail)
    prompt = build_prompt(summary_json, focus)

    if llm is None:
        llm = LLMBackendManager.create_llm(model_name)

    logger.info(f"🤖 Requesting assessment for {summary.path} (focus: {focus.value})")

    messages = [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(content=prompt)
    ]

    try:
        response = await llm.ainvoke(messages)
    except Exception as e:
        logger.error(f"❌ Assessment request failed: {e}")
        raise

    text = extract_text(response)
    logger.info(f"✅ Assessment received ({len(text)} chars)")
    return text
