"""
OpenRouter AI Provider.

Provides AI capabilities using OpenRouter API (supports multiple models)
through the OpenAI-compatible chat completions endpoint.
"""
from typing import Optional
from openai import OpenAI
from ...core.config import (
    OPENROUTER_API_KEY,
    OPENROUTER_BASE_URL,
    AI_MODEL,
    AI_TEMPERATURE,
    AI_MAX_TOKENS
)
from ...core.logging_config import get_logger
from .base import AIProvider

logger = get_logger(__name__)

DEFAULT_OPENROUTER_MODEL = "anthropic/claude-3-haiku"


class OpenRouterProvider(AIProvider):
    """
    AI Provider using OpenRouter API.

    Supports multiple AI models through OpenRouter; the model is chosen
    with AI_MODEL and defaults to Claude 3 Haiku.
    """

    name = "openrouter"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Initialize OpenRouter provider with API key."""
        self.api_key = api_key or OPENROUTER_API_KEY
        self.model = model or AI_MODEL or DEFAULT_OPENROUTER_MODEL
        if self.api_key:
            self.client = OpenAI(
                base_url=OPENROUTER_BASE_URL,
                api_key=self.api_key
            )
        else:
            self.client = None

    def complete(self, prompt: str) -> str:
        if not self.client:
            raise ValueError("OpenRouter API key not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "user", "content": prompt}
                ],
                temperature=AI_TEMPERATURE,
                max_tokens=AI_MAX_TOKENS
            )
            return response.choices[0].message.content or ""
        except Exception as e:
            logger.error(f"OpenRouter API Error (Analysis): {e}")
            raise

    def describe(self) -> str:
        return f"{self.name} ({self.model})"
