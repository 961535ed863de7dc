"""Entry point — wires Config → ModelClient → XrayAnalyzer and probes the service."""
import asyncio
import logging
import sys

from rich.logging import RichHandler

from xray_analyst.analyzer import XrayAnalyzer
from xray_analyst.config import Config
from xray_analyst import constants
from xray_analyst.constants import MSG_BACKEND, MSG_STARTING
from xray_analyst.errors import ConnectivityError
from xray_analyst.vision.claude import ClaudeModelClient
from xray_analyst.vision.client import ModelClient
from xray_analyst.vision.gemini import GeminiModelClient
from xray_analyst.vision.openai import OpenAIModelClient

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def build_model_client(config: Config) -> ModelClient:
    model_kwargs = {"model": config.model_name} if config.model_name else {}
    match config.model_backend:
        case constants.BACKEND_CLAUDE:
            return ClaudeModelClient(config.api_key, **model_kwargs)
        case constants.BACKEND_OPENAI:
            return OpenAIModelClient(config.api_key, **model_kwargs)
        case _:
            return GeminiModelClient(config.api_key, **model_kwargs)


def build_analyzer(config: Config) -> XrayAnalyzer:
    model = build_model_client(config)
    logger.info(MSG_BACKEND, model.name, config.model_name or "default model")
    return XrayAnalyzer(
        model,
        retry_policy=config.retry_policy,
        fetch_timeout=config.fetch_timeout,
    )


def main() -> int:
    config = Config.from_env()
    _setup_logging(config.log_level)
    logger.info(MSG_STARTING)

    analyzer = build_analyzer(config)
    try:
        return 0 if asyncio.run(analyzer.check_connectivity()) else 1
    except ConnectivityError:
        return 1


if __name__ == "__main__":
    sys.exit(main())
