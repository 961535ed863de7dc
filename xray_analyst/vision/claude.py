"""ClaudeModelClient — Anthropic Claude vision backend."""
from typing import Optional

from anthropic import APIError, APIStatusError, AsyncAnthropic

from xray_analyst.constants import CLAUDE_MAX_TOKENS, CLAUDE_VISION_MODEL
from xray_analyst.errors import remote_error
from xray_analyst.request import InlineDataPart, Part, TextPart
from xray_analyst.vision.client import ModelClient


def to_claude_block(part: Part) -> dict:
    match part:
        case TextPart(text=text):
            return {"type": "text", "text": text}
        case InlineDataPart(mime_type=mime_type, data=data):
            return {
                "type": "image",
                "source": {"type": "base64", "media_type": mime_type, "data": data},
            }
        case _:
            raise TypeError(f"Unsupported part: {part!r}")


class ClaudeModelClient(ModelClient):
    name = "claude"

    def __init__(self, api_key: str, model: str = CLAUDE_VISION_MODEL) -> None:
        self._model = model
        self._client = AsyncAnthropic(api_key=api_key)

    async def generate(self, parts: list[Part]) -> Optional[str]:
        try:
            message = await self._client.messages.create(
                model=self._model,
                max_tokens=CLAUDE_MAX_TOKENS,
                messages=[{"role": "user", "content": [to_claude_block(p) for p in parts]}],
            )
        except APIStatusError as exc:
            raise remote_error(exc, exc.status_code) from exc
        except APIError as exc:
            raise remote_error(exc) from exc
        texts = [block.text for block in message.content if block.type == "text"]
        match texts:
            case []:
                return None
            case _:
                return "".join(texts).strip()
