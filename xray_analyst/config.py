from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from xray_analyst.constants import (
    BACKEND_CLAUDE,
    BACKEND_GEMINI,
    BACKEND_OPENAI,
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_MAX_ATTEMPTS,
)
from xray_analyst.retry import RetryPolicy

_BACKEND_KEYS = {
    BACKEND_GEMINI: "GOOGLE_API_KEY",
    BACKEND_CLAUDE: "ANTHROPIC_API_KEY",
    BACKEND_OPENAI: "OPENAI_API_KEY",
}


@dataclass(frozen=True)
class Config:
    model_backend: str
    model_name: Optional[str]
    log_level: str
    google_api_key: Optional[str]
    anthropic_api_key: Optional[str]
    openai_api_key: Optional[str]
    retry_max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_base_delay_ms: int = DEFAULT_BASE_DELAY_MS
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT

    @property
    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(self.retry_max_attempts, self.retry_base_delay_ms)

    @property
    def api_key(self) -> Optional[str]:
        return {
            BACKEND_GEMINI: self.google_api_key,
            BACKEND_CLAUDE: self.anthropic_api_key,
            BACKEND_OPENAI: self.openai_api_key,
        }.get(self.model_backend)

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        backend = os.getenv("MODEL_BACKEND", BACKEND_GEMINI).strip().lower()
        model_name = os.getenv("MODEL_NAME") or None
        log_level = os.getenv("LOG_LEVEL", "INFO")
        google_api_key = os.getenv("GOOGLE_API_KEY") or None
        anthropic_api_key = os.getenv("ANTHROPIC_API_KEY") or None
        openai_api_key = os.getenv("OPENAI_API_KEY") or None
        max_attempts = os.getenv("RETRY_MAX_ATTEMPTS", str(DEFAULT_MAX_ATTEMPTS))
        base_delay_ms = os.getenv("RETRY_BASE_DELAY_MS", str(DEFAULT_BASE_DELAY_MS))
        fetch_timeout = os.getenv("FETCH_TIMEOUT", str(DEFAULT_FETCH_TIMEOUT))

        return cls._validate(
            model_backend=backend,
            model_name=model_name,
            log_level=log_level,
            google_api_key=google_api_key,
            anthropic_api_key=anthropic_api_key,
            openai_api_key=openai_api_key,
            retry_max_attempts=int(max_attempts),
            retry_base_delay_ms=int(base_delay_ms),
            fetch_timeout=float(fetch_timeout),
        )

    @staticmethod
    def _validate(
        model_backend: str,
        model_name: Optional[str],
        log_level: str,
        google_api_key: Optional[str],
        anthropic_api_key: Optional[str],
        openai_api_key: Optional[str],
        retry_max_attempts: int,
        retry_base_delay_ms: int,
        fetch_timeout: float,
    ) -> "Config":
        match model_backend:
            case str() as b if b in _BACKEND_KEYS:
                pass
            case other:
                raise ValueError(f"MODEL_BACKEND must be one of {sorted(_BACKEND_KEYS)}, got {other!r}")

        config = Config(
            model_backend=model_backend,
            model_name=model_name,
            log_level=log_level,
            google_api_key=google_api_key,
            anthropic_api_key=anthropic_api_key,
            openai_api_key=openai_api_key,
            retry_max_attempts=retry_max_attempts,
            retry_base_delay_ms=retry_base_delay_ms,
            fetch_timeout=fetch_timeout,
        )

        match config.api_key:
            case None | "":
                raise ValueError(f"{_BACKEND_KEYS[model_backend]} must be set in .env")
            case _:
                pass

        RetryPolicy(retry_max_attempts, retry_base_delay_ms)  # raises ValueError when out of range
        return config
