"""LLM Service - Abstraction layer for inference API calls.

This module provides a unified interface for calling different LLM providers
(any OpenAI-compatible endpoint such as Groq, or Gemini) with consistent
error handling and response formatting.

Interface Contract:
- call() returns str (raw text)
- call() raises LLMServiceError on failure
- Callers should not depend on specific LLM provider details
"""

from __future__ import annotations

import base64
import logging
import os
from abc import ABC, abstractmethod
from typing import Any

import google.generativeai as genai
from openai import OpenAI

import config

logger = logging.getLogger(__name__)


class LLMServiceError(Exception):
    """Raised when LLM call fails."""
    pass


class BaseLLMService(ABC):
    """Abstract base class for LLM services."""

    @abstractmethod
    def call(
        self,
        prompt: str,
        *,
        system: str | None = None,
        images: list[str] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> str:
        """Call the LLM with a prompt.

        Args:
            prompt: The user prompt to send to the LLM
            system: Optional system instruction
            images: Optional base64-encoded JPEG images to attach
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            top_p: Nucleus sampling cutoff

        Returns:
            str: The LLM response text

        Raises:
            LLMServiceError: If the call fails
        """
        pass


class OpenAIService(BaseLLMService):
    """Chat-completion service for OpenAI-compatible endpoints (Groq by default)."""

    def __init__(
        self,
        model: str = config.DEFAULT_MODEL,
        *,
        base_url: str | None = config.LLM_BASE_URL,
        api_key: str | None = None,
    ):
        self.model = model
        self.base_url = base_url
        self._api_key = api_key
        self._client: OpenAI | None = None

    def _get_client(self) -> OpenAI:
        """Get or create OpenAI client (lazy initialization)."""
        if self._client is None:
            api_key = self._api_key or config.get_llm_api_key()
            if not api_key:
                raise LLMServiceError(
                    "LLM_API_KEY, GROQ_API_KEY or OPENAI_API_KEY environment variable not set"
                )
            self._client = OpenAI(api_key=api_key, base_url=self.base_url)
        return self._client

    def build_messages(
        self,
        prompt: str,
        *,
        system: str | None = None,
        images: list[str] | None = None,
    ) -> list[dict[str, Any]]:
        """Build chat messages, attaching images as data-URL content parts."""
        messages: list[dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})

        if images:
            content: list[dict[str, Any]] = [{"type": "text", "text": prompt}]
            for image in images:
                content.append({
                    "type": "image_url",
                    "image_url": {"url": f"data:image/jpeg;base64,{image}"},
                })
            messages.append({"role": "user", "content": content})
        else:
            messages.append({"role": "user", "content": prompt})
        return messages

    def call(
        self,
        prompt: str,
        *,
        system: str | None = None,
        images: list[str] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> str:
        """Call the chat-completion endpoint."""
        try:
            client = self._get_client()
            params: dict[str, Any] = {}
            if temperature is not None:
                params["temperature"] = temperature
            if max_tokens is not None:
                params["max_tokens"] = max_tokens
            if top_p is not None:
                params["top_p"] = top_p

            response = client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(prompt, system=system, images=images),
                **params,
            )
            return response.choices[0].message.content or ""
        except LLMServiceError:
            raise
        except Exception as e:
            raise LLMServiceError(f"OpenAI-compatible call failed: {e}") from e


class GeminiService(BaseLLMService):
    """Google Gemini LLM service implementation."""

    def __init__(self, model: str = config.GEMINI_MODEL):
        self.model = model
        self._configured = False

    def _configure(self) -> None:
        """Configure Gemini API (lazy initialization)."""
        if self._configured:
            return
        api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY")
        if not api_key:
            raise LLMServiceError("GEMINI_API_KEY or GOOGLE_API_KEY environment variable not set")
        genai.configure(api_key=api_key)
        self._configured = True

    def call(
        self,
        prompt: str,
        *,
        system: str | None = None,
        images: list[str] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> str:
        """Call Gemini model."""
        self._configure()
        try:
            gen_config = genai.GenerationConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
                top_p=top_p,
            )
            model = genai.GenerativeModel(self.model, system_instruction=system)
            contents: list[Any] = [prompt]
            for image in images or []:
                contents.append({"mime_type": "image/jpeg", "data": base64.b64decode(image)})
            response = model.generate_content(contents, generation_config=gen_config)
            return response.text
        except Exception as e:
            raise LLMServiceError(f"Gemini call failed: {e}") from e


# Default service instance (can be swapped for testing)
class LLMService:
    """Facade for LLM services with provider switching."""

    _instance: BaseLLMService | None = None

    @classmethod
    def get_instance(cls) -> BaseLLMService:
        """Get the configured LLM service instance."""
        if cls._instance is None:
            if config.LLM_PROVIDER == "gemini":
                cls._instance = GeminiService()
            else:
                cls._instance = OpenAIService()
            logger.info("[llm] provider=%s", config.LLM_PROVIDER)
        return cls._instance

    @classmethod
    def set_instance(cls, service: BaseLLMService) -> None:
        """Set a custom LLM service (useful for testing)."""
        cls._instance = service

    @classmethod
    def reset(cls) -> None:
        """Reset to default service."""
        cls._instance = None
