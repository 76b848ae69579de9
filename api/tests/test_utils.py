import base64

import pytest

from stamper.errors import InvalidImageDataError
from stamper.utils import b64image_to_bytes, read_image_dimensions

from conftest import as_data_url, make_png


def test_data_url_and_bare_base64_decode_to_same_bytes():
    png = make_png()
    assert b64image_to_bytes(as_data_url(png)) == png
    assert b64image_to_bytes(base64.b64encode(png).decode()) == png


@pytest.mark.parametrize("value", ["", "   ", "data:image/png;base64,", "not base64 at all!!"])
def test_empty_or_garbage_signature_is_rejected(value):
    with pytest.raises(InvalidImageDataError):
        b64image_to_bytes(value)


def test_png_dimensions_are_read():
    dims = read_image_dimensions(make_png(37, 11))
    assert (dims.width, dims.height) == (37, 11)


def test_jpeg_is_accepted():
    dims = read_image_dimensions(make_png(8, 4, fmt="JPEG"))
    assert (dims.width, dims.height) == (8, 4)


def test_non_image_bytes_are_rejected():
    with pytest.raises(InvalidImageDataError):
        read_image_dimensions(b"\x89PNG definitely not an image")


def test_unsupported_format_is_rejected():
    with pytest.raises(InvalidImageDataError):
        read_image_dimensions(make_png(4, 4, fmt="GIF"))
