"""
Anthropic AI Provider.

Provides AI capabilities using Anthropic's Claude API directly.
"""
from typing import Optional
import anthropic
from ...core.config import ANTHROPIC_API_KEY, AI_MODEL, AI_TEMPERATURE, AI_MAX_TOKENS
from ...core.logging_config import get_logger
from .base import AIProvider

logger = get_logger(__name__)

DEFAULT_ANTHROPIC_MODEL = "claude-3-haiku-20240307"


class AnthropicProvider(AIProvider):
    """AI Provider using Anthropic Claude API directly."""

    name = "anthropic"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Initialize Anthropic provider with API key."""
        self.api_key = api_key or ANTHROPIC_API_KEY
        self.model = model or AI_MODEL or DEFAULT_ANTHROPIC_MODEL
        if self.api_key:
            self.client = anthropic.Anthropic(api_key=self.api_key)
        else:
            self.client = None

    def complete(self, prompt: str) -> str:
        if not self.client:
            raise ValueError("Anthropic API key not configured")

        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=AI_MAX_TOKENS,
                temperature=AI_TEMPERATURE,
                messages=[
                    {"role": "user", "content": prompt}
                ]
            )
            # Replies may interleave non-text blocks
            return "".join(
                block.text for block in message.content if getattr(block, "type", None) == "text"
            )
        except Exception as e:
            logger.error(f"Anthropic API Error (Analysis): {e}")
            raise

    def describe(self) -> str:
        return f"{self.name} ({self.model})"
