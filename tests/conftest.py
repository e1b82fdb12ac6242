import io
import os
import tempfile

# Settings are read at import time, so they must be in place before the app loads
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="docanalyzer-uploads-"))
os.environ.setdefault("AI_PROVIDER", "mock")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docanalyzer.domain.entities import FileDescriptor
from docanalyzer.services.providers import AIProvider


class ScriptedProvider(AIProvider):
    """Returns canned replies in order and records every prompt it receives."""

    name = "scripted"

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply


VALID_REPLY = (
    '```json\n'
    '{"sentiment": "Positive", "topics": ["finance", "growth"], '
    '"summary": "Quarterly results improved.", "entities": ["Acme Corp"], '
    '"keyInsights": ["Revenue grew"], "confidence": 0.85}\n'
    '```'
)


@pytest.fixture()
def upload_dir(tmp_path):
    directory = tmp_path / "uploads"
    directory.mkdir()
    return directory


@pytest.fixture()
def scripted_provider():
    return ScriptedProvider(VALID_REPLY)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    from docx import Document

    document = Document()
    document.add_paragraph("First paragraph")
    document.add_paragraph("Second paragraph")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Name"
    table.rows[0].cells[1].text = "Value"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


def make_descriptor(file_id: str, file_path: str, mime_type: str = "text/plain", file_name: str = None):
    return FileDescriptor(
        id=file_id,
        file_name=file_name or f"{file_id}.txt",
        file_path=file_path,
        type=mime_type,
    )
