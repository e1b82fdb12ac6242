"""
AI Provider Factory.

Manages provider selection and initialization based on configuration.
Uses the Factory pattern to provide plug-and-play AI provider support.
"""
from ...core.config import (
    OPENROUTER_API_KEY,
    ANTHROPIC_API_KEY,
    AI_PROVIDER
)
from ...core.logging_config import get_logger
from .base import AIProvider
from .openrouter_provider import OpenRouterProvider
from .anthropic_provider import AnthropicProvider
from .mock_provider import MockProvider

logger = get_logger(__name__)


class AIProviderFactory:
    """
    Factory for creating AI provider instances.

    Automatically selects the appropriate provider based on:
    1. AI_PROVIDER configuration
    2. Available API keys
    3. Fallback to MockProvider if no keys available
    """

    @staticmethod
    def get_provider(provider_type: str = AI_PROVIDER) -> AIProvider:
        """
        Get the appropriate AI provider based on configuration.

        Returns:
            AIProvider instance (OpenRouterProvider, AnthropicProvider, or MockProvider)
        """
        provider_type = (provider_type or "").lower()

        if provider_type == "mock":
            logger.info("Using MockProvider (configured)")
            return MockProvider()

        if provider_type == "anthropic":
            preference = ("anthropic", "openrouter")
        elif provider_type == "openrouter":
            preference = ("openrouter", "anthropic")
        else:
            logger.warning(f"Unknown provider '{provider_type}', checking available API keys...")
            preference = ("openrouter", "anthropic")

        for index, candidate in enumerate(preference):
            if candidate == "openrouter" and OPENROUTER_API_KEY:
                if index:
                    logger.info("Using OpenRouter provider as fallback")
                else:
                    logger.info("Using OpenRouter provider")
                return OpenRouterProvider()
            if candidate == "anthropic" and ANTHROPIC_API_KEY:
                if index:
                    logger.info("Using Anthropic provider as fallback")
                else:
                    logger.info("Using Anthropic provider")
                return AnthropicProvider()

        logger.warning("No API keys configured, using MockProvider")
        return MockProvider()
