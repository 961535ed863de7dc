"""OpenAIModelClient — OpenAI GPT-4o vision backend."""
from typing import Optional

from openai import APIError, APIStatusError, AsyncOpenAI

from xray_analyst.constants import OPENAI_VISION_MODEL
from xray_analyst.errors import remote_error
from xray_analyst.request import InlineDataPart, Part, TextPart
from xray_analyst.vision.client import ModelClient


def to_openai_block(part: Part) -> dict:
    match part:
        case TextPart(text=text):
            return {"type": "text", "text": text}
        case InlineDataPart(mime_type=mime_type, data=data):
            return {
                "type": "image_url",
                "image_url": {"url": f"data:{mime_type};base64,{data}"},
            }
        case _:
            raise TypeError(f"Unsupported part: {part!r}")


class OpenAIModelClient(ModelClient):
    name = "openai"

    def __init__(self, api_key: str, model: str = OPENAI_VISION_MODEL) -> None:
        self._model = model
        self._client = AsyncOpenAI(api_key=api_key)

    async def generate(self, parts: list[Part]) -> Optional[str]:
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": [to_openai_block(p) for p in parts]}],
            )
        except APIStatusError as exc:
            raise remote_error(exc, exc.status_code) from exc
        except APIError as exc:
            raise remote_error(exc) from exc
        if not response.choices:
            return None
        content = response.choices[0].message.content
        return content.strip() if content else None
