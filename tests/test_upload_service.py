import asyncio
import io
import os
import time

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from docanalyzer.api.exceptions import FileValidationError
from docanalyzer.services.file_service import FileService
from docanalyzer.services.storage import LocalFileStorage
from docanalyzer.services.upload_service import UploadService


def make_upload(name: str, content: bytes, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        size=len(content),
        filename=name,
        headers=Headers({"content-type": content_type}),
    )


class FailingStorage(LocalFileStorage):
    async def save_bytes(self, content: bytes, file_path: str) -> str:
        raise OSError("disk full")


@pytest.fixture()
def service(upload_dir):
    return UploadService(FileService(LocalFileStorage(upload_dir)), max_file_size=10 * 1024 * 1024)


def receive(service, files):
    return asyncio.run(service.receive_files(files))


class TestUploadService:
    def test_stores_accepted_file_under_uuid_name(self, service, upload_dir) -> None:
        [outcome] = receive(service, [make_upload("report.final.pdf", b"%PDF-1.4", "application/pdf")])
        assert outcome.success is True
        assert outcome.file_name == "report.final.pdf"
        assert outcome.original_name == "report.final.pdf"
        assert outcome.size == 8
        assert outcome.type == "application/pdf"
        assert outcome.file_path == f"{outcome.id}.pdf"
        assert outcome.uploaded_at is not None
        assert (upload_dir / outcome.file_path).read_bytes() == b"%PDF-1.4"

    def test_size_limit_boundary(self, upload_dir) -> None:
        service = UploadService(FileService(LocalFileStorage(upload_dir)), max_file_size=10)
        at_limit, over_limit = receive(service, [
            make_upload("ok.txt", b"x" * 10, "text/plain"),
            make_upload("big.txt", b"x" * 11, "text/plain"),
        ])
        assert at_limit.success is True
        assert over_limit.success is False
        assert over_limit.error.startswith("File size exceeds limit")

    def test_default_limit_message(self, service) -> None:
        assert service.size_limit_message == "File size exceeds limit (10MB)"

    def test_unsupported_type_is_rejected_without_storing(self, service, upload_dir) -> None:
        [outcome] = receive(service, [make_upload("photo.png", b"\x89PNG", "image/png")])
        assert outcome.success is False
        assert outcome.error == "Unsupported file type"
        assert outcome.id is None
        assert list(upload_dir.iterdir()) == []

    def test_outcomes_follow_input_order(self, service) -> None:
        outcomes = receive(service, [
            make_upload("a.txt", b"a", "text/plain"),
            make_upload("b.png", b"b", "image/png"),
            make_upload("c.txt", b"c", "text/plain"),
        ])
        assert [o.file_name for o in outcomes] == ["a.txt", "b.png", "c.txt"]
        assert [o.success for o in outcomes] == [True, False, True]
        assert outcomes[0].id != outcomes[2].id

    def test_save_failure_is_reported_per_file(self, upload_dir) -> None:
        service = UploadService(FileService(FailingStorage(upload_dir)))
        [outcome] = receive(service, [make_upload("a.txt", b"a", "text/plain")])
        assert outcome.success is False
        assert outcome.error == "Failed to save file"

    def test_no_files(self, service) -> None:
        with pytest.raises(FileValidationError, match="No files uploaded"):
            receive(service, [])

    def test_stale_files_are_swept_before_storing(self, service, upload_dir) -> None:
        stale = upload_dir / "stale.txt"
        stale.write_text("old")
        two_hours_ago = time.time() - 7200
        os.utime(stale, (two_hours_ago, two_hours_ago))

        receive(service, [make_upload("new.txt", b"new", "text/plain")])

        assert not stale.exists()
        assert len(list(upload_dir.iterdir())) == 1
