import base64
import binascii
import io

from PIL import Image

from .errors import InvalidImageDataError
from .geometry import ImageDimensions

SUPPORTED_IMAGE_FORMATS = ("PNG", "JPEG")


def b64image_to_bytes(data_url: str) -> bytes:
    # accepts "data:image/png;base64,....." or bare base64
    if not data_url or not data_url.strip():
        raise InvalidImageDataError("signature image data is empty")
    if "," in data_url:
        data_url = data_url.split(",", 1)[1]
    try:
        raw = base64.b64decode(data_url.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidImageDataError("signature image data is not valid base64") from exc
    if not raw:
        raise InvalidImageDataError("signature image data is empty")
    return raw


def read_image_dimensions(image_bytes: bytes) -> ImageDimensions:
    """Decode just enough of the image to validate it and read its pixel size."""
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            fmt = img.format
            width, height = img.size
            img.verify()
    except (OSError, SyntaxError, ValueError) as exc:
        raise InvalidImageDataError("signature data is not a decodable image") from exc
    if fmt not in SUPPORTED_IMAGE_FORMATS:
        raise InvalidImageDataError(f"unsupported signature image format: {fmt}")
    return ImageDimensions(width=width, height=height)
