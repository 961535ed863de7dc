import base64

import httpx
import pytest

from xray_analyst.encoder import (
    content_type,
    decode_payload,
    encode_bytes,
    parse_data_uri,
    read_image,
)
from xray_analyst.errors import EncodingError
from xray_analyst.request import EncodedImage

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x01"


def test_encode_then_decode_returns_original_bytes():
    image = encode_bytes(PNG_BYTES, "image/png")

    assert "," not in image.payload
    assert not image.payload.startswith("data:")
    assert decode_payload(image) == PNG_BYTES
    assert image.byte_size == len(PNG_BYTES)
    assert image.mime_type == "image/png"


def test_encode_empty_bytes_fails():
    with pytest.raises(EncodingError):
        encode_bytes(b"", "image/png")


def test_decode_invalid_payload_fails():
    with pytest.raises(EncodingError):
        decode_payload(EncodedImage("image/png", "not base64!!"))


def test_parse_data_uri_strips_prefix():
    payload = base64.b64encode(PNG_BYTES).decode()

    image = parse_data_uri(f"data:image/png;base64,{payload}")

    assert image.mime_type == "image/png"
    assert image.payload == payload


@pytest.mark.parametrize(
    "uri",
    [
        "data:image/png;base64",
        "data:image/png;base64,",
        "data:image/png,abcd",
        "image/png;base64,abcd",
        "data:image/png;base64,@@@@",
    ],
)
def test_parse_data_uri_rejects_malformed(uri):
    with pytest.raises(EncodingError):
        parse_data_uri(uri)


def test_content_type_drops_parameters_and_defaults():
    assert content_type(httpx.Response(200, headers={"content-type": "image/jpeg; q=1"})) == "image/jpeg"
    assert content_type(httpx.Response(200)) == "application/octet-stream"


async def test_read_image_encodes_body_with_declared_type():
    response = httpx.Response(200, headers={"content-type": "image/jpeg"}, content=PNG_BYTES)

    image = await read_image(response)

    assert image.mime_type == "image/jpeg"
    assert decode_payload(image) == PNG_BYTES


async def test_read_image_wraps_stream_failures():
    class BrokenStream(httpx.AsyncByteStream):
        async def __aiter__(self):
            raise httpx.ReadError("connection reset")
            yield b""

    response = httpx.Response(200, headers={"content-type": "image/png"}, stream=BrokenStream())

    with pytest.raises(EncodingError):
        await read_image(response)
