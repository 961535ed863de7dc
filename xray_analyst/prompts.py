"""Language table and prompt builders — pure, module-level so tests can import them directly."""
import logging
from dataclasses import dataclass
from typing import Optional

from xray_analyst.constants import (
    IMAGE_PROMPT,
    LANGUAGE_DIRECTIVE,
    MSG_UNKNOWN_LANGUAGE,
    TEXT_PROMPT,
    TRANSLATE_PROMPT,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Language:
    tag: str
    name: str
    directive: str


def _language(tag: str, name: str, *, directive: bool = True) -> Language:
    return Language(tag, name, LANGUAGE_DIRECTIVE.format(language=name) if directive else "")


LANGUAGES: dict[str, Language] = {
    lang.tag: lang
    for lang in (
        _language("english", "English", directive=False),
        _language("hindi", "Hindi"),
        _language("marathi", "Marathi"),
    )
}


def resolve_language(tag: str) -> Optional[Language]:
    return LANGUAGES.get(tag.strip().lower())


def language_directive(tag: str) -> str:
    """Directive sentence for a language tag; unknown tags get none (English phrasing)."""
    match resolve_language(tag):
        case None:
            logger.warning(MSG_UNKNOWN_LANGUAGE, tag)
            return ""
        case lang:
            return lang.directive


def build_text_prompt(prompt: str, language: str) -> str:
    return TEXT_PROMPT.format(prompt=prompt, language=language)


def build_image_prompt(prompt: str, language: str) -> str:
    return IMAGE_PROMPT.format(prompt=prompt, directive=language_directive(language))


def build_translation_prompt(analysis: str, language: str) -> str:
    return TRANSLATE_PROMPT.format(language=language, analysis=analysis)
