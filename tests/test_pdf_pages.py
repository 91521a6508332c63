import io
import base64

import pytest
from PIL import Image

from tools.pdf_pages import collect_images, image_to_data_url, is_pdf, pdf_to_data_urls


def _decode(data_url: str) -> Image.Image:
    header, b64 = data_url.split(",", 1)
    return Image.open(io.BytesIO(base64.b64decode(b64)))


@pytest.mark.parametrize(
    "filename,mime,expected",
    (
        ("card.pdf", None, True),
        ("CARD.PDF", "", True),
        ("scan", "application/pdf", True),
        ("card.jpg", "image/jpeg", False),
        (None, None, False),
    ),
)
def test_is_pdf(filename, mime, expected):
    assert is_pdf(filename, mime) is expected


def test_image_to_data_url_defaults_to_jpeg():
    assert image_to_data_url(b"abc") == "data:image/jpeg;base64,YWJj"
    assert image_to_data_url(b"abc", "image/png").startswith("data:image/png;base64,")


def test_pdf_pages_become_one_jpeg_each(pdf_bytes):
    urls = pdf_to_data_urls(pdf_bytes(3))

    assert len(urls) == 3
    assert all(u.startswith("data:image/jpeg;base64,") for u in urls)
    im = _decode(urls[0])
    assert im.format == "JPEG"
    # default page is 595x842pt, rendered at 2x
    assert im.size == (1190, 1684)


def test_unreadable_pdf_raises_value_error():
    with pytest.raises(ValueError):
        pdf_to_data_urls(b"definitely not a pdf")


def test_collect_images_keeps_submission_order(pdf_bytes):
    photo_a = image_to_data_url(b"first photo", "image/png")
    photo_b = image_to_data_url(b"last photo", "image/jpeg")

    images = collect_images(
        [
            ("front.png", "image/png", b"first photo"),
            ("scan.pdf", "application/pdf", pdf_bytes(2)),
            ("back.jpg", "image/jpeg", b"last photo"),
        ]
    )

    assert len(images) == 4
    assert images[0] == photo_a
    assert images[1].startswith("data:image/jpeg;base64,")
    assert images[2].startswith("data:image/jpeg;base64,")
    assert images[1] != images[2]
    assert images[3] == photo_b
