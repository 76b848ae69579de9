import base64
import io
import os
from typing import Dict

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas
from sqlmodel import SQLModel, Session, create_engine

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

from stamper.main import app  # noqa: E402
from stamper import db as db_module  # noqa: E402
from stamper.db import get_session  # noqa: E402
from stamper import storage as storage_module  # noqa: E402


def make_pdf(pages: int = 2, pagesize=letter) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=pagesize)
    for n in range(pages):
        c.setFont("Helvetica", 12)
        c.drawString(72, 720, f"Template page {n + 1}")
        c.showPage()
    c.save()
    return buf.getvalue()


def make_png(width: int = 20, height: int = 10, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    mode = "RGBA" if fmt == "PNG" else "RGB"
    Image.new(mode, (width, height), (0, 0, 0, 255) if mode == "RGBA" else (0, 0, 0)).save(buf, format=fmt)
    return buf.getvalue()


def as_data_url(data: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode()}"


@pytest.fixture
def template_pdf() -> bytes:
    return make_pdf()


@pytest.fixture
def signature_png() -> bytes:
    return make_png()


@pytest.fixture
def signature_data_url(signature_png) -> str:
    return as_data_url(signature_png)


@pytest.fixture(scope="session")
def test_engine(tmp_path_factory):
    db_path = tmp_path_factory.mktemp("data") / "test.db"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    return engine


@pytest.fixture
def setup_db(test_engine):
    SQLModel.metadata.drop_all(test_engine)
    SQLModel.metadata.create_all(test_engine)
    yield
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture
def mock_storage(monkeypatch, template_pdf) -> Dict[str, bytes]:
    store: Dict[str, bytes] = {}

    def fake_put_bytes(key: str, data: bytes, content_type: str = "application/octet-stream"):
        store[key] = bytes(data)

    def fake_get_bytes(key: str) -> bytes:
        if key not in store:
            raise FileNotFoundError(key)
        return store[key]

    def fake_delete_object(key: str):
        store.pop(key, None)

    monkeypatch.setattr(storage_module, "put_bytes", fake_put_bytes)
    monkeypatch.setattr(storage_module, "get_bytes", fake_get_bytes)
    monkeypatch.setattr(storage_module, "delete_object", fake_delete_object)
    monkeypatch.setattr(storage_module, "read_template", lambda: template_pdf)
    return store


@pytest.fixture
def client(monkeypatch, test_engine, setup_db, mock_storage):
    monkeypatch.setattr(db_module, "engine", test_engine)

    def override_session():
        with Session(test_engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
