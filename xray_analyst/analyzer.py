"""XrayAnalyzer — builds model requests, runs them through the retrier, normalizes failures."""
import asyncio
import functools
import logging
from typing import Optional

import httpx

from xray_analyst.connectivity import check_connectivity
from xray_analyst.constants import (
    DATA_URI_SCHEME,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_LANGUAGE,
    MSG_ANALYSIS_FAILED,
    MSG_EMPTY_RESPONSE,
    MSG_FETCH_FAILED,
    MSG_FETCHING,
    MSG_NOTHING_TO_TRANSLATE,
    MSG_REQUEST,
    MSG_RESPONSE,
    MSG_SERVICE_UNAVAILABLE,
    MSG_UNEXPECTED,
)
from xray_analyst.encoder import parse_data_uri, read_image
from xray_analyst.errors import (
    AnalysisError,
    EmptyResponseError,
    FetchError,
    InvalidRequestError,
    PermanentError,
    RetriesExhausted,
)
from xray_analyst.prompts import build_image_prompt, build_text_prompt, build_translation_prompt
from xray_analyst.request import AnalysisRequest, EncodedImage, Part, TextPart
from xray_analyst.retry import DEFAULT_RETRY_POLICY, RetryPolicy, Sleep, retry_with_backoff
from xray_analyst.vision.client import ModelClient

logger = logging.getLogger(__name__)


def _normalize(exc: Exception) -> AnalysisError:
    """Map any failure onto the one-sentence errors callers are allowed to show."""
    match exc:
        case RetriesExhausted():
            return RetriesExhausted(MSG_SERVICE_UNAVAILABLE)
        case AnalysisError():
            return exc
        case _ if str(exc):
            return PermanentError(str(exc))
        case _:
            return AnalysisError(MSG_UNEXPECTED)


class XrayAnalyzer:
    """Orchestrates one analysis per call; overlapping calls are independent."""

    def __init__(
        self,
        model: ModelClient,
        *,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        http_client: Optional[httpx.AsyncClient] = None,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._model = model
        self._retry_policy = retry_policy
        self._http_client = http_client
        self._fetch_timeout = fetch_timeout
        self._sleep = sleep

    async def check_connectivity(self) -> bool:
        return await check_connectivity(self._model)

    async def analyze(
        self,
        image_source: Optional[str],
        prompt_text: str,
        target_language: str = DEFAULT_LANGUAGE,
    ) -> str:
        try:
            request = AnalysisRequest(image_source, prompt_text, target_language)
            parts = await self._build_parts(request)
            logger.info(MSG_REQUEST, request.mode, request.language)
            text = await retry_with_backoff(
                functools.partial(self._generate, parts),
                self._retry_policy,
                sleep=self._sleep,
            )
        except Exception as exc:
            logger.exception(MSG_ANALYSIS_FAILED)
            normalized = _normalize(exc)
            if normalized is exc:
                raise
            raise normalized from exc
        logger.info(MSG_RESPONSE, len(text))
        return text

    async def translate(
        self,
        analysis: str,
        target_language: str,
        image_source: Optional[str] = None,
    ) -> str:
        """Re-ask the model for ``analysis`` in another language; English returns it as-is."""
        if not analysis.strip():
            raise InvalidRequestError(MSG_NOTHING_TO_TRANSLATE)
        language = target_language.strip().lower()
        if language == DEFAULT_LANGUAGE:
            return analysis
        return await self.analyze(
            image_source,
            build_translation_prompt(analysis, language),
            language,
        )

    # ── request building ──────────────────────────────────────────────────────

    async def _build_parts(self, request: AnalysisRequest) -> list[Part]:
        match request.image_source:
            case None | "":
                return [TextPart(build_text_prompt(request.prompt_text, request.language))]
            case source:
                image = await self._load_image(source)
                return [
                    TextPart(build_image_prompt(request.prompt_text, request.language)),
                    image.to_part(),
                ]

    async def _load_image(self, source: str) -> EncodedImage:
        if source.startswith(DATA_URI_SCHEME):
            return parse_data_uri(source)
        logger.debug(MSG_FETCHING, source)
        match self._http_client:
            case None:
                async with httpx.AsyncClient(
                    timeout=self._fetch_timeout, follow_redirects=True
                ) as client:
                    return await self._fetch(client, source)
            case client:
                return await self._fetch(client, source)

    @staticmethod
    async def _fetch(client: httpx.AsyncClient, source: str) -> EncodedImage:
        try:
            async with client.stream("GET", source) as response:
                if not response.is_success:
                    raise FetchError(MSG_FETCH_FAILED, response.status_code)
                return await read_image(response)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(MSG_FETCH_FAILED) from exc

    async def _generate(self, parts: list[Part]) -> str:
        response = await self._model.generate(parts)
        if response is None:
            raise EmptyResponseError(MSG_EMPTY_RESPONSE)
        return response
