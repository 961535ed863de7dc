"""Binary encoder — turns image bytes into the base64 payload sent to the model."""
import base64
import binascii

import httpx

from xray_analyst.constants import (
    DATA_URI_BASE64_MARKER,
    DATA_URI_SCHEME,
    DEFAULT_MIME_TYPE,
    MSG_ENCODE_FAILED,
    MSG_READ_FAILED,
)
from xray_analyst.errors import EncodingError
from xray_analyst.request import EncodedImage


def encode_bytes(data: bytes, mime_type: str) -> EncodedImage:
    if not data:
        raise EncodingError(MSG_ENCODE_FAILED)
    return EncodedImage(mime_type=mime_type, payload=base64.b64encode(data).decode("ascii"))


def decode_payload(image: EncodedImage) -> bytes:
    try:
        return base64.b64decode(image.payload, validate=True)
    except binascii.Error as exc:
        raise EncodingError(MSG_ENCODE_FAILED) from exc


def parse_data_uri(uri: str) -> EncodedImage:
    """Split ``data:<mime>;base64,<payload>`` into an EncodedImage, prefix stripped."""
    header, sep, payload = uri.partition(",")
    if not sep or not payload or not header.startswith(DATA_URI_SCHEME):
        raise EncodingError(MSG_ENCODE_FAILED)
    if not header.endswith(DATA_URI_BASE64_MARKER):
        raise EncodingError(MSG_ENCODE_FAILED)
    mime_type = header[len(DATA_URI_SCHEME):-len(DATA_URI_BASE64_MARKER)] or DEFAULT_MIME_TYPE
    image = EncodedImage(mime_type=mime_type, payload=payload.strip())
    decode_payload(image)
    return image


def content_type(response: httpx.Response) -> str:
    raw = response.headers.get("content-type", "")
    return raw.split(";", 1)[0].strip() or DEFAULT_MIME_TYPE


async def read_image(response: httpx.Response) -> EncodedImage:
    """Read a fetched response body and encode it with its declared content type."""
    try:
        data = await response.aread()
    except (httpx.HTTPError, httpx.StreamError) as exc:
        raise EncodingError(MSG_READ_FAILED) from exc
    finally:
        await response.aclose()
    return encode_bytes(data, content_type(response))
