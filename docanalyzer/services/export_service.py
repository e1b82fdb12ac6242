"""
Export Service - Renders analysis results as downloadable JSON or CSV.
"""
import csv
import io
import json
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional

from ..api.mappers import DocumentAnalysisMapper
from ..core.logging_config import get_logger
from ..domain.entities import DocumentAnalysis

logger = get_logger(__name__)

CSV_HEADERS = [
    "File Name",
    "File Type",
    "Word Count",
    "Sentiment",
    "Topics",
    "Summary",
    "Entities",
    "Key Insights",
    "Confidence",
    "Processing Time (ms)",
    "Analyzed At",
]

SORT_KEYS = ("name", "confidence", "wordCount", "date")
LIST_SEPARATOR = "; "


def filter_by_sentiment(results: Iterable[DocumentAnalysis], sentiment: Optional[str]) -> List[DocumentAnalysis]:
    """Keep results whose sentiment matches case-insensitively; None or "all" keeps everything."""
    results = list(results)
    if not sentiment or sentiment.lower() == "all":
        return results
    wanted = sentiment.lower()
    return [result for result in results if result.sentiment.lower() == wanted]


def sort_results(results: Iterable[DocumentAnalysis], sort_by: Optional[str]) -> List[DocumentAnalysis]:
    """
    Order results for display or export.

    name sorts A-Z; confidence, wordCount and date sort highest/newest first.
    Without a key the input order is kept.

    Raises:
        ValueError: If sort_by is not a known key
    """
    results = list(results)
    if not sort_by:
        return results
    if sort_by == "name":
        return sorted(results, key=lambda r: r.file_name.casefold())
    if sort_by == "confidence":
        return sorted(results, key=lambda r: r.confidence, reverse=True)
    if sort_by == "wordCount":
        return sorted(results, key=lambda r: r.word_count, reverse=True)
    if sort_by == "date":
        return sorted(results, key=lambda r: _as_utc(r.analyzed_at), reverse=True)
    raise ValueError(f"Unknown sort key '{sort_by}', expected one of: {', '.join(SORT_KEYS)}")


def _as_utc(moment: datetime) -> datetime:
    # Naive timestamps from clients are read as UTC so they compare with aware ones
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def _number(value: float) -> str:
    # 0.85 -> "0.85", 1.0 -> "1"
    return f"{value:g}" if isinstance(value, float) else str(value)


def _csv_row(result: DocumentAnalysis) -> List[str]:
    return [
        result.file_name,
        result.file_type,
        str(result.word_count),
        result.sentiment,
        LIST_SEPARATOR.join(result.topics),
        result.summary.replace(",", ";"),
        LIST_SEPARATOR.join(result.entities),
        LIST_SEPARATOR.join(result.key_insights),
        _number(result.confidence),
        str(result.processing_time),
        result.analyzed_at.isoformat(),
    ]


class ExportService:
    """Builds export payloads from DocumentAnalysis lists."""

    def prepare(
        self,
        results: Iterable[DocumentAnalysis],
        sentiment: Optional[str] = None,
        sort_by: Optional[str] = None
    ) -> List[DocumentAnalysis]:
        return sort_results(filter_by_sentiment(results, sentiment), sort_by)

    def to_json(self, results: Iterable[DocumentAnalysis]) -> str:
        payload = [
            dto.model_dump(mode="json", by_alias=True)
            for dto in DocumentAnalysisMapper.to_dto_list(list(results))
        ]
        return json.dumps(payload, indent=2, ensure_ascii=False)

    def to_csv(self, results: Iterable[DocumentAnalysis]) -> str:
        """Every cell is double-quoted, rows end with a bare newline."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        count = 0
        for result in results:
            writer.writerow(_csv_row(result))
            count += 1
        logger.debug(f"Rendered CSV export with {count} row(s)")
        # No trailing newline after the last row
        return buffer.getvalue().rstrip("\n")

    @staticmethod
    def download_name(extension: str, today: Optional[date] = None) -> str:
        today = today or date.today()
        return f"document-analysis-{today.isoformat()}.{extension}"
