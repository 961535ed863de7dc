"""Value types passed between the analyzer, the encoder and the model backends."""
from dataclasses import dataclass
from typing import Optional, Union

from xray_analyst.constants import (
    DEFAULT_LANGUAGE,
    MSG_IMAGE_REQUIRED,
    MSG_PROMPT_REQUIRED,
)
from xray_analyst.errors import InvalidRequestError


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class InlineDataPart:
    mime_type: str
    data: str  # base64, no data-URI prefix


Part = Union[TextPart, InlineDataPart]


@dataclass(frozen=True)
class EncodedImage:
    mime_type: str
    payload: str

    @property
    def byte_size(self) -> int:
        padding = len(self.payload) - len(self.payload.rstrip("="))
        return len(self.payload) * 3 // 4 - padding

    def to_part(self) -> InlineDataPart:
        return InlineDataPart(mime_type=self.mime_type, data=self.payload)


@dataclass(frozen=True)
class AnalysisRequest:
    image_source: Optional[str]
    prompt_text: str
    target_language: str = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        if self.image_source:
            return
        # Without an image the only useful request is a text one in another language.
        if self.language == DEFAULT_LANGUAGE:
            raise InvalidRequestError(MSG_IMAGE_REQUIRED)
        if not self.prompt_text.strip():
            raise InvalidRequestError(MSG_PROMPT_REQUIRED)

    @property
    def language(self) -> str:
        return (self.target_language or DEFAULT_LANGUAGE).strip().lower()

    @property
    def mode(self) -> str:
        return "image" if self.image_source else "text"
