import asyncio

import pytest

from conftest import ScriptedProvider, VALID_REPLY, make_descriptor
from docanalyzer.api.exceptions import BatchInputError, EmptyContentError, ExternalAPIError
from docanalyzer.domain.entities import FileDescriptor, ProcessingProgress, UploadedFile
from docanalyzer.services.ai_service import AnalysisService
from docanalyzer.services.batch_processing_service import BatchProcessingService
from docanalyzer.services.document_processing_service import DocumentProcessingService
from docanalyzer.services.file_service import FileService
from docanalyzer.services.progress_registry import ProgressListener, ProgressRegistry
from docanalyzer.services.storage import LocalFileStorage


class RecordingListener(ProgressListener):
    def __init__(self):
        self.events = []

    def on_progress(self, progress) -> None:
        self.events.append(progress)

    def for_file(self, file_id):
        return [(e.progress, e.status, e.message) for e in self.events if e.file_id == file_id]


class BrokenListener(ProgressListener):
    def on_progress(self, progress) -> None:
        raise RuntimeError("observer crashed")


def build_services(upload_dir, provider):
    file_service = FileService(LocalFileStorage(upload_dir))
    processing = DocumentProcessingService(AnalysisService(provider), file_service)
    return processing, BatchProcessingService(processing)


def store(upload_dir, name, content):
    (upload_dir / name).write_bytes(content)


class TestDocumentProcessingService:
    def test_assembles_analysis_and_deletes_file(self, upload_dir, scripted_provider) -> None:
        store(upload_dir, "f1.txt", b"one two   three")
        processing, _ = build_services(upload_dir, scripted_provider)

        result = asyncio.run(processing.process_document(make_descriptor("f1", "f1.txt", file_name="notes.txt")))

        assert result.id == "f1"
        assert result.file_name == "notes.txt"
        assert result.file_type == "text/plain"
        assert result.word_count == 3
        assert result.page_count == 1
        assert result.text_content == "one two   three"
        assert result.sentiment == "Positive"
        assert result.processing_time >= 0
        assert not (upload_dir / "f1.txt").exists()

    def test_text_preview_is_first_1000_characters(self, upload_dir, scripted_provider) -> None:
        store(upload_dir, "long.txt", b"a" * 5000)
        processing, _ = build_services(upload_dir, scripted_provider)
        result = asyncio.run(processing.process_document(make_descriptor("long", "long.txt")))
        assert result.text_content == "a" * 1000

    def test_file_deleted_when_processing_fails(self, upload_dir, scripted_provider) -> None:
        store(upload_dir, "blank.txt", b"   \n  ")
        processing, _ = build_services(upload_dir, scripted_provider)
        with pytest.raises(EmptyContentError):
            asyncio.run(processing.process_document(make_descriptor("blank", "blank.txt")))
        assert not (upload_dir / "blank.txt").exists()
        assert scripted_provider.prompts == []

    def test_stage_callback_sees_checkpoints_in_order(self, upload_dir, scripted_provider) -> None:
        store(upload_dir, "f.txt", b"content")
        processing, _ = build_services(upload_dir, scripted_provider)
        seen = []

        async def on_stage(stage):
            seen.append(stage.progress)

        asyncio.run(processing.process_document(make_descriptor("f", "f.txt"), on_stage=on_stage))
        assert seen == [10, 25, 50, 75]


class TestBatchProcessingService:
    def test_results_in_input_order_with_error_records(self, upload_dir) -> None:
        store(upload_dir, "a.txt", b"alpha text")
        store(upload_dir, "b.png", b"\x89PNG")
        store(upload_dir, "c.txt", b"gamma text")
        provider = ScriptedProvider(VALID_REPLY)
        _, batch = build_services(upload_dir, provider)
        descriptors = [
            make_descriptor("a", "a.txt"),
            make_descriptor("b", "b.png", mime_type="image/png", file_name="b.png"),
            make_descriptor("c", "c.txt"),
        ]

        result = asyncio.run(batch.process_batch(descriptors))

        assert [r.id for r in result.results] == ["a", "b", "c"]
        assert result.total_files == 3
        assert result.processed_files == 2
        assert result.failed_files == 1
        failed = result.results[1]
        assert failed.is_error()
        assert failed.sentiment == "Error"
        assert failed.confidence == 0
        assert failed.processing_time == 0
        assert failed.word_count == 0
        assert failed.summary == "Processing failed: Unsupported file type: image/png"
        assert list(upload_dir.iterdir()) == []

    def test_provider_failure_does_not_stop_batch(self, upload_dir) -> None:
        store(upload_dir, "a.txt", b"alpha")
        store(upload_dir, "b.txt", b"beta")
        provider = ScriptedProvider(ExternalAPIError("rate limited"), VALID_REPLY)
        _, batch = build_services(upload_dir, provider)

        result = asyncio.run(batch.process_batch([make_descriptor("a", "a.txt"), make_descriptor("b", "b.txt")]))

        assert result.results[0].is_error()
        assert "rate limited" in result.results[0].summary
        assert result.results[1].sentiment == "Positive"
        assert len(provider.prompts) == 2

    def test_missing_stored_file_becomes_error_record(self, upload_dir, scripted_provider) -> None:
        _, batch = build_services(upload_dir, scripted_provider)
        result = asyncio.run(batch.process_batch([make_descriptor("ghost", "ghost.txt")]))
        assert result.failed_files == 1
        assert result.results[0].summary == "Processing failed: Failed to extract text from document"

    def test_progress_sequence(self, upload_dir, scripted_provider) -> None:
        store(upload_dir, "ok.txt", b"fine content")
        store(upload_dir, "empty.txt", b"")
        _, batch = build_services(upload_dir, scripted_provider)
        listener = RecordingListener()

        asyncio.run(batch.process_batch(
            [make_descriptor("ok", "ok.txt"), make_descriptor("empty", "empty.txt")],
            listener=listener,
        ))

        assert listener.for_file("ok") == [
            (0, "Initializing...", "Preparing document for analysis"),
            (10, "Processing...", "Analyzing document content"),
            (25, "Processing...", "Extracting text content..."),
            (50, "Processing...", "Running AI analysis..."),
            (75, "Processing...", "Processing insights..."),
            (100, "Completed", "Analysis complete!"),
        ]
        assert listener.for_file("empty")[-1] == (0, "Error", "No text content found in document")
        # Every file is initialized before the first one starts
        assert [e.progress for e in listener.events[:2]] == [0, 0]

    def test_listener_errors_are_ignored(self, upload_dir, scripted_provider) -> None:
        store(upload_dir, "a.txt", b"alpha")
        _, batch = build_services(upload_dir, scripted_provider)
        result = asyncio.run(batch.process_batch([make_descriptor("a", "a.txt")], listener=BrokenListener()))
        assert result.processed_files == 1

    def test_registry_keeps_latest_progress(self, upload_dir, scripted_provider) -> None:
        store(upload_dir, "a.txt", b"alpha")
        processing, _ = build_services(upload_dir, scripted_provider)
        registry = ProgressRegistry()
        batch = BatchProcessingService(processing, listener=registry)

        asyncio.run(batch.process_batch([make_descriptor("a", "a.txt")]))

        latest = registry.get("a")
        assert latest.progress == 100
        assert latest.status == "Completed"
        assert registry.get("unknown") is None

    def test_malformed_descriptor_fails_before_processing(self, upload_dir, scripted_provider) -> None:
        store(upload_dir, "a.txt", b"alpha")
        _, batch = build_services(upload_dir, scripted_provider)
        descriptors = [
            make_descriptor("a", "a.txt"),
            FileDescriptor(id="b", file_name="b.txt", file_path="", type="text/plain"),
        ]
        with pytest.raises(BatchInputError, match="file_path"):
            asyncio.run(batch.process_batch(descriptors))
        assert (upload_dir / "a.txt").exists()
        assert scripted_provider.prompts == []

    def test_empty_batch(self, upload_dir, scripted_provider) -> None:
        _, batch = build_services(upload_dir, scripted_provider)
        result = asyncio.run(batch.process_batch([]))
        assert result.total_files == 0
        assert result.results == []


class TestProgressRegistry:
    def test_finished_batches_are_dropped_when_next_batch_starts(self, upload_dir, scripted_provider) -> None:
        processing, _ = build_services(upload_dir, scripted_provider)
        registry = ProgressRegistry()
        batch = BatchProcessingService(processing, listener=registry)

        for i in range(50):
            store(upload_dir, f"f{i}.txt", b"some text")
            asyncio.run(batch.process_batch([make_descriptor(f"f{i}", f"f{i}.txt")]))

        assert [p.file_id for p in registry.snapshot()] == ["f49"]
        assert registry.get("f49").status == "Completed"
        assert registry.get("f0") is None

    def test_running_batch_survives_another_batch_start(self) -> None:
        registry = ProgressRegistry()
        registry.on_batch_start(["a"])
        registry.on_progress(ProcessingProgress("a", 25, "Processing...", "Extracting text content..."))

        registry.on_batch_start(["b"])
        registry.on_progress(ProcessingProgress("b", 0, "Initializing...", "Preparing document for analysis"))

        assert registry.get("a").progress == 25
        assert {p.file_id for p in registry.snapshot()} == {"a", "b"}


class TestUploadLifecycle:
    def test_uploads_move_to_completed_or_error(self, upload_dir, scripted_provider) -> None:
        store(upload_dir, "good.txt", b"useful content")
        store(upload_dir, "blank.txt", b"  ")
        _, batch = build_services(upload_dir, scripted_provider)
        good = UploadedFile(id="good", name="good.txt", size=14, type="text/plain", file_path="good.txt")
        blank = UploadedFile(id="blank", name="blank.txt", size=2, type="text/plain", file_path="blank.txt")
        assert good.status == "uploaded"

        seen = []

        class StatusListener(ProgressListener):
            def on_progress(self, progress) -> None:
                if progress.progress == 10:
                    seen.append((progress.file_id, good.status if progress.file_id == "good" else blank.status))

        result = asyncio.run(batch.process_uploads([good, blank], listener=StatusListener()))

        assert seen == [("good", "processing"), ("blank", "processing")]
        assert good.is_completed()
        assert blank.is_failed()
        assert good.file_path is None
        assert blank.file_path is None
        assert [r.id for r in result.results] == ["good", "blank"]
        assert result.failed_files == 1

    def test_upload_without_storage_handle_is_rejected(self, upload_dir, scripted_provider) -> None:
        _, batch = build_services(upload_dir, scripted_provider)
        released = UploadedFile(id="x", name="x.txt", size=1, type="text/plain")
        with pytest.raises(BatchInputError, match="file_path"):
            asyncio.run(batch.process_uploads([released]))
        assert released.status == "uploaded"

    def test_descriptor_from_uploaded(self) -> None:
        uploaded = UploadedFile(id="u1", name="report.pdf", size=10, type="application/pdf", file_path="u1.pdf")
        assert FileDescriptor.from_uploaded(uploaded) == FileDescriptor(
            id="u1", file_name="report.pdf", file_path="u1.pdf", type="application/pdf"
        )
