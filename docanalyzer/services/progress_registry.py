"""
In-memory progress tracking for running batches.
"""
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Set

from ..domain.entities import ProcessingProgress


class ProgressListener(ABC):
    """Receives per-file progress events from BatchProcessingService."""

    @abstractmethod
    def on_progress(self, progress: ProcessingProgress) -> None:
        pass

    def on_batch_start(self, file_ids: Sequence[str]) -> None:
        pass

    def on_batch_end(self, file_ids: Sequence[str]) -> None:
        pass


class ProgressRegistry(ProgressListener):
    """
    Keeps the latest ProcessingProgress per file id so clients can poll it.

    A finished batch stays readable until the next batch starts; its entries
    are dropped then. Batches still running are never touched.
    """

    def __init__(self):
        self._latest: Dict[str, ProcessingProgress] = {}
        self._finished: Set[str] = set()
        self._lock = threading.Lock()

    def on_batch_start(self, file_ids: Sequence[str]) -> None:
        with self._lock:
            for file_id in self._finished:
                self._latest.pop(file_id, None)
            self._finished.clear()

    def on_batch_end(self, file_ids: Sequence[str]) -> None:
        with self._lock:
            self._finished.update(file_ids)

    def on_progress(self, progress: ProcessingProgress) -> None:
        with self._lock:
            self._latest[progress.file_id] = progress

    def get(self, file_id: str) -> Optional[ProcessingProgress]:
        with self._lock:
            return self._latest.get(file_id)

    def snapshot(self) -> List[ProcessingProgress]:
        with self._lock:
            return list(self._latest.values())
