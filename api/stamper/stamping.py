import logging
from io import BytesIO

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .errors import TemplateUnavailableError
from .geometry import DrawInstruction, PageGeometry

logger = logging.getLogger(__name__)


def open_pdf(pdf_bytes: bytes) -> PdfReader:
    try:
        reader = PdfReader(BytesIO(pdf_bytes))
        page_count = len(reader.pages)
    except (PdfReadError, ValueError) as exc:
        raise TemplateUnavailableError(f"template is not a readable PDF: {exc}") from exc
    if page_count == 0:
        raise TemplateUnavailableError("template has no pages")
    return reader


def select_page(reader: PdfReader, page_number: int) -> int:
    """0-based index for a 1-based page number; unknown pages fall back to the first."""
    num_pages = len(reader.pages)
    if 1 <= page_number <= num_pages:
        return page_number - 1
    logger.warning("Page %s not in template (%d pages), using page 1", page_number, num_pages)
    return 0


def page_geometry(reader: PdfReader, page_index: int) -> PageGeometry:
    box = reader.pages[page_index].mediabox
    return PageGeometry(width_points=float(box.width), height_points=float(box.height))


def _overlay_page(width, height, origin, draw: DrawInstruction, image_bytes: bytes):
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=(width, height))
    left, bottom = origin
    c.drawImage(
        ImageReader(BytesIO(image_bytes)),
        left + draw.x,
        bottom + draw.y,
        width=draw.width,
        height=draw.height,
        mask="auto",
    )
    c.showPage()
    c.save()
    return buf.getvalue()


def stamp_image(reader: PdfReader, page_index: int, draw: DrawInstruction, image_bytes: bytes) -> bytes:
    writer = PdfWriter()
    for p in reader.pages:
        writer.add_page(p)
    box = reader.pages[page_index].mediabox
    overlay_pdf = _overlay_page(
        float(box.width), float(box.height), (float(box.left), float(box.bottom)), draw, image_bytes
    )
    overlay_reader = PdfReader(BytesIO(overlay_pdf))
    writer.pages[page_index].merge_page(overlay_reader.pages[0])
    out = BytesIO()
    writer.write(out)
    return out.getvalue()
