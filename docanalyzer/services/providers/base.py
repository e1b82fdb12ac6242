"""
Base AI Provider Interface.

All AI providers must inherit from this base class and implement
all abstract methods.
"""
from abc import ABC, abstractmethod


class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    A provider takes a fully rendered prompt and returns the model's raw
    text reply. Prompt construction and reply parsing live in AnalysisService.
    """

    name = "base"

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """
        Send a single prompt to the model.

        Args:
            prompt: Fully rendered prompt text

        Returns:
            Raw text of the model's reply

        Raises:
            Exception: Any SDK or transport failure, unmodified
        """
        pass

    def describe(self) -> str:
        """Short label used in startup logs."""
        return self.name
