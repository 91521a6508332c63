# src/tools/pdf_pages.py
from __future__ import annotations

import io
import base64
import logging
from typing import Iterable, List, Optional, Tuple

import fitz  # PyMuPDF
from PIL import Image

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"


def is_pdf(filename: Optional[str], mime_type: Optional[str]) -> bool:
    if mime_type and mime_type.lower() == PDF_MIME:
        return True
    return bool(filename) and filename.lower().endswith(".pdf")


def image_to_data_url(data: bytes, mime_type: Optional[str] = None) -> str:
    """Encodes raw image bytes as a data URL."""
    mime = mime_type or "image/jpeg"
    return f"data:{mime};base64,{base64.b64encode(data).decode('utf-8')}"


def _png_to_jpeg(png: bytes, quality: int) -> bytes:
    im = Image.open(io.BytesIO(png))
    if im.mode != "RGB":
        im = im.convert("RGB")
    out = io.BytesIO()
    im.save(out, format="JPEG", quality=quality)
    return out.getvalue()


def pdf_to_data_urls(pdf_bytes: bytes, zoom: float = 2.0, quality: int = 90) -> List[str]:
    """
    Render ALL pages of a PDF to JPEG data URLs, one per page, in page order.
    zoom=2.0 renders at twice the PDF's native 72 dpi.
    """
    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    except Exception as e:
        raise ValueError(f"Could not read PDF: {e}") from e

    pages: List[str] = []
    mat = fitz.Matrix(zoom, zoom)
    with doc:
        for page in doc:
            pix = page.get_pixmap(matrix=mat, alpha=False)
            jpeg = _png_to_jpeg(pix.tobytes("png"), quality)
            pages.append(image_to_data_url(jpeg, "image/jpeg"))
    logger.info("Rasterized %d PDF page(s)", len(pages))
    return pages


def collect_images(files: Iterable[Tuple[str, Optional[str], bytes]]) -> List[str]:
    """
    Flatten uploaded files into one ordered list of image data URLs.
    `files` yields (filename, mime_type, bytes); PDFs expand to their pages in place.
    """
    images: List[str] = []
    for filename, mime_type, data in files:
        if is_pdf(filename, mime_type):
            images.extend(pdf_to_data_urls(data))
        else:
            images.append(image_to_data_url(data, mime_type))
    return images
