import asyncio
import time
from typing import Any, Dict, List, Optional

from .providers import AIProvider, AIProviderFactory
from ..api.exceptions import EmptyContentError, ExternalAPIError, ResponseParseError
from ..core.config import CHUNK_SIZE, CHUNK_OVERLAP, WORDS_PER_PAGE
from ..core.logging_config import get_logger
from ..domain.entities import AnalysisResult
from ..utils import count_words, estimate_page_count, split_text, parse_model_json

logger = get_logger(__name__)

ANALYSIS_TEMPLATE = """You are an expert document analyzer. Analyze the following document content and provide comprehensive insights.

Document Content: "{document_text}"

Provide your analysis in JSON format:
{{
  "sentiment": "Positive/Negative/Neutral/Mixed",
  "topics": ["topic1", "topic2", "topic3"],
  "summary": "Comprehensive summary in 2-3 sentences",
  "entities": ["entity1", "entity2", "entity3"],
  "keyInsights": ["insight1", "insight2", "insight3"],
  "confidence": 0.85
}}

Focus on:
- Overall sentiment and tone
- Main topics and themes
- Key entities (people, organizations, locations)
- Important insights or takeaways
- Confidence level in your analysis (0.0-1.0)

Respond with valid JSON only."""

DEFAULT_CONFIDENCE = 0.7
DEFAULT_SENTIMENT = "Neutral"
MISSING_SUMMARY = "No summary available"

FALLBACK_ANALYSIS: Dict[str, Any] = {
    "sentiment": "Analysis completed",
    "topics": ["Document analysis"],
    "summary": "Document processed successfully",
    "entities": [],
    "keyInsights": ["Document contains valuable content"],
    "confidence": DEFAULT_CONFIDENCE,
}


def build_prompt_payload(chunks: List[str]) -> str:
    """Render the document text sent to the model; multi-chunk text gets part headers."""
    if len(chunks) == 1:
        return chunks[0]
    total = len(chunks)
    return "\n\n".join(f"[Part {index}/{total}]\n{chunk}" for index, chunk in enumerate(chunks, start=1))


def build_prompt(chunks: List[str]) -> str:
    return ANALYSIS_TEMPLATE.format(document_text=build_prompt_payload(chunks))


def _string_list(value: Any) -> tuple:
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in value)


def _confidence(value: Any) -> float:
    """
    Model confidence as a fraction in [0, 1].

    Falsy, boolean or non-numeric values become 0.7. Numbers outside the range
    are clamped rather than rescaled, so a reply of 85 is stored as 1.0.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        return DEFAULT_CONFIDENCE
    return min(max(float(value), 0.0), 1.0)


def coerce_analysis(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize a parsed model reply into the analysis shape.

    List fields that are not lists become empty, list items become strings,
    a missing summary or sentiment gets a placeholder, and confidence falls
    back to 0.7 when falsy or non-numeric before being clamped to [0, 1].
    """
    sentiment = raw.get("sentiment")
    summary = raw.get("summary")
    return {
        "sentiment": str(sentiment) if sentiment else DEFAULT_SENTIMENT,
        "topics": _string_list(raw.get("topics")),
        "summary": str(summary) if summary else MISSING_SUMMARY,
        "entities": _string_list(raw.get("entities")),
        "keyInsights": _string_list(raw.get("keyInsights")),
        "confidence": _confidence(raw.get("confidence")),
    }


class AnalysisService:
    """
    AI analysis service.
    Turns extracted document text into a structured AnalysisResult with a
    single language-model call.
    Follows Single Responsibility Principle.
    """

    def __init__(
        self,
        provider: Optional[AIProvider] = None,
        chunk_size: int = CHUNK_SIZE,
        chunk_overlap: int = CHUNK_OVERLAP,
        words_per_page: int = WORDS_PER_PAGE
    ):
        self.provider = provider or AIProviderFactory.get_provider()
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.words_per_page = words_per_page
        logger.info(f"Initialized AnalysisService with provider: {type(self.provider).__name__}")

    async def analyze(self, text: str) -> AnalysisResult:
        """
        Analyze document text.

        Raises:
            EmptyContentError: If the text is empty or whitespace only
            ExternalAPIError: If the provider call fails
        """
        started = time.monotonic()
        if not text or not text.strip():
            raise EmptyContentError("No text content found in document")

        chunks = split_text(text, chunk_size=self.chunk_size, chunk_overlap=self.chunk_overlap)
        logger.debug(f"Analyzing text (length: {len(text)} chars, chunks: {len(chunks)})")
        # Short documents go into the prompt untouched
        prompt = build_prompt(chunks if len(chunks) > 1 else [text])

        reply = await self._request(prompt)

        used_fallback = False
        try:
            analysis = coerce_analysis(parse_model_json(reply))
        except ResponseParseError as e:
            logger.error(f"JSON parsing error, using fallback analysis: {e}")
            analysis = coerce_analysis(FALLBACK_ANALYSIS)
            used_fallback = True

        word_count = count_words(text)
        duration_ms = int((time.monotonic() - started) * 1000)
        return AnalysisResult(
            sentiment=analysis["sentiment"],
            topics=analysis["topics"],
            summary=analysis["summary"],
            entities=analysis["entities"],
            key_insights=analysis["keyInsights"],
            confidence=analysis["confidence"],
            word_count=word_count,
            page_count=estimate_page_count(word_count, self.words_per_page),
            duration_ms=duration_ms,
            used_fallback=used_fallback,
        )

    async def _request(self, prompt: str) -> str:
        # SDK clients are synchronous
        loop = asyncio.get_running_loop()
        try:
            reply = await loop.run_in_executor(None, self.provider.complete, prompt)
        except Exception as e:
            logger.error(f"AI Service Error during analysis: {e}", exc_info=True)
            raise ExternalAPIError(f"AI analysis request failed: {e}") from e
        logger.debug(f"Model reply received (length: {len(reply) if reply else 0} chars)")
        return reply or ""
