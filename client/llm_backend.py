"""
LLM Backend Manager
Creates the chat model used for directory assessments (OpenAI or Ollama)
"""

import os
import logging
from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_ollama import ChatOllama
from langchain_openai import ChatOpenAI

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("openai", "ollama")

DEFAULT_OPENAI_MODEL = "gpt-5.2"
DEFAULT_OLLAMA_MODEL = "llama3.2:3b"
DEFAULT_MAX_OUTPUT_TOKENS = 500


class LLMBackendManager:
    """Factory for creating LLM instances"""

    @staticmethod
    def get_backend_type() -> str:
        """Get current backend from environment"""
        return os.getenv("LLM_BACKEND", "openai").strip().lower()

    @staticmethod
    def get_default_model(backend: Optional[str] = None) -> str:
        """Model name for a backend, honouring OPENAI_MODEL / OLLAMA_MODEL"""
        backend = backend or LLMBackendManager.get_backend_type()
        if backend == "ollama":
            return os.getenv("OLLAMA_MODEL") or DEFAULT_OLLAMA_MODEL
        return os.getenv("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL

    @staticmethod
    def get_max_output_tokens() -> int:
        raw = os.getenv("LSAI_MAX_OUTPUT_TOKENS", "").strip()
        if not raw:
            return DEFAULT_MAX_OUTPUT_TOKENS
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"LSAI_MAX_OUTPUT_TOKENS must be an integer, got: {raw!r}")
        if value < 1:
            raise ValueError(f"LSAI_MAX_OUTPUT_TOKENS must be >= 1, got: {value}")
        return value

    @staticmethod
    def create_llm(model_name: Optional[str] = None,
                   temperature: Optional[float] = None,
                   **kwargs) -> BaseChatModel:
        """
        Create LLM instance for the backend selected by LLM_BACKEND

        Args:
            model_name: Model name; defaults to the backend's configured model
            temperature: Sampling temperature, left to the provider default when None

        Returns:
            BaseChatModel instance

        Raises:
            ValueError: If the backend is unknown or OPENAI_API_KEY is missing
        """
        backend = LLMBackendManager.get_backend_type()
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unknown backend: {backend}\n"
                f"Set LLM_BACKEND to one of: {', '.join(SUPPORTED_BACKENDS)}"
            )

        model_name = model_name or LLMBackendManager.get_default_model(backend)
        max_tokens = LLMBackendManager.get_max_output_tokens()
        if temperature is not None:
            kwargs["temperature"] = temperature

        if backend == "ollama":
            logger.info(f"🔧 Using Ollama model: {model_name}")
            return ChatOllama(model=model_name, num_predict=max_tokens, **kwargs)

        api_key = os.getenv("OPENAI_API_KEY", "").strip()
        if not api_key:
            raise ValueError(
                "OPENAI_API_KEY is not set.\n"
                "Export it or add it to .env, or switch backends with LLM_BACKEND=ollama"
            )

        # Responses API on api.openai.com; compatible endpoints usually only speak chat completions
        base_url = os.getenv("OPENAI_BASE_URL", "").strip()
        if base_url:
            kwargs["base_url"] = base_url
        kwargs.setdefault("use_responses_api", not base_url)

        logger.info(f"🔧 Using OpenAI model: {model_name}")
        return ChatOpenAI(model=model_name, api_key=api_key, max_tokens=max_tokens, **kwargs)
