"""GeminiModelClient — Google Gemini backend."""
from typing import Optional

from google import genai
from google.genai import errors, types

from xray_analyst.constants import GEMINI_MODEL
from xray_analyst.encoder import decode_payload
from xray_analyst.errors import remote_error
from xray_analyst.request import EncodedImage, InlineDataPart, Part, TextPart
from xray_analyst.vision.client import ModelClient


def to_gemini_part(part: Part) -> types.Part:
    match part:
        case TextPart(text=text):
            return types.Part.from_text(text=text)
        case InlineDataPart(mime_type=mime_type, data=data):
            raw = decode_payload(EncodedImage(mime_type=mime_type, payload=data))
            return types.Part.from_bytes(data=raw, mime_type=mime_type)
        case _:
            raise TypeError(f"Unsupported part: {part!r}")


class GeminiModelClient(ModelClient):
    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = GEMINI_MODEL,
        client: Optional[genai.Client] = None,
    ) -> None:
        self._model = model
        self._client = client or genai.Client(api_key=api_key)

    async def generate(self, parts: list[Part]) -> Optional[str]:
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=[to_gemini_part(p) for p in parts],
            )
        except errors.APIError as exc:
            raise remote_error(exc, exc.code) from exc
        if response is None:
            return None
        return response.text
