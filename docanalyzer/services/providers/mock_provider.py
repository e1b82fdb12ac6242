"""
Mock AI Provider.

Provides a mock implementation for testing and fallback scenarios.
Does not make actual API calls, returns a simulated analysis.
"""
import json
import re
from collections import Counter
from ...core.logging_config import get_logger
from .base import AIProvider

logger = get_logger(__name__)

POSITIVE_WORDS = {"good", "great", "excellent", "success", "growth", "improved", "happy", "benefit"}
NEGATIVE_WORDS = {"bad", "poor", "failure", "loss", "decline", "risk", "problem", "issue"}

# Pulls the embedded document back out of the analysis prompt
DOCUMENT_PATTERN = re.compile(r'Document Content: "(.*)"\s*\n\s*Provide your analysis', re.DOTALL)


class MockProvider(AIProvider):
    """
    Mock AI Provider for testing and fallback scenarios.

    Provides simulated AI responses without making actual API calls.
    Useful for:
    - Development and testing
    - Fallback when API keys are not configured
    - Offline development

    The reply is deterministic for a given prompt.
    """

    name = "mock"

    def complete(self, prompt: str) -> str:
        match = DOCUMENT_PATTERN.search(prompt)
        text = match.group(1) if match else prompt
        words = [w.lower() for w in re.findall(r"[A-Za-z]+", text)]

        positive = sum(1 for w in words if w in POSITIVE_WORDS)
        negative = sum(1 for w in words if w in NEGATIVE_WORDS)
        if positive and negative:
            sentiment = "Mixed"
        elif positive:
            sentiment = "Positive"
        elif negative:
            sentiment = "Negative"
        else:
            sentiment = "Neutral"

        # Simple keyword extraction (most frequent longer words)
        common = [w for w, _ in Counter(w for w in words if len(w) > 4).most_common(3)]
        topics = common or ["document", "content", "text"]
        entities = sorted({w for w in re.findall(r"\b[A-Z][a-z]{2,}\b", text)})[:3]

        analysis = {
            "sentiment": sentiment,
            "topics": topics,
            "summary": f"This is a MOCK summary of a document with {len(words)} words.",
            "entities": entities,
            "keyInsights": [f"Most frequent term: {topics[0]}"],
            "confidence": 0.5,
        }
        logger.debug("MockProvider returning simulated analysis")
        return f"```json\n{json.dumps(analysis, indent=2)}\n```"
