from unittest.mock import AsyncMock, patch

from xray_analyst.analyzer import XrayAnalyzer
from xray_analyst.config import Config
from xray_analyst.errors import ConnectivityError
from xray_analyst.main import build_analyzer, build_model_client, main
from xray_analyst.vision.claude import ClaudeModelClient
from xray_analyst.vision.gemini import GeminiModelClient
from xray_analyst.vision.openai import OpenAIModelClient


def make_config(backend: str = "gemini", **overrides) -> Config:
    fields = dict(
        model_backend=backend,
        model_name=None,
        log_level="INFO",
        google_api_key="AIza-test",
        anthropic_api_key="sk-ant-test",
        openai_api_key="sk-test",
    )
    fields.update(overrides)
    return Config(**fields)


def test_build_model_client_selects_backend():
    assert isinstance(build_model_client(make_config("gemini")), GeminiModelClient)
    assert isinstance(build_model_client(make_config("claude")), ClaudeModelClient)
    assert isinstance(build_model_client(make_config("openai")), OpenAIModelClient)


def test_build_analyzer_uses_configured_policy():
    analyzer = build_analyzer(make_config(retry_max_attempts=2, retry_base_delay_ms=10))

    assert isinstance(analyzer, XrayAnalyzer)
    assert analyzer._retry_policy.max_attempts == 2


def test_main_exit_code_follows_probe(monkeypatch):
    monkeypatch.setattr(Config, "from_env", classmethod(lambda cls: make_config()))
    monkeypatch.setattr("xray_analyst.main._setup_logging", lambda level: None)

    with patch.object(XrayAnalyzer, "check_connectivity", new=AsyncMock(return_value=True)):
        assert main() == 0

    with patch.object(
        XrayAnalyzer, "check_connectivity", new=AsyncMock(side_effect=ConnectivityError("down"))
    ):
        assert main() == 1


def test_build_model_client_passes_the_selected_backend_key():
    config = make_config("openai", google_api_key=None, anthropic_api_key=None)

    with patch("xray_analyst.main.OpenAIModelClient") as mock_cls:
        build_model_client(config)

    mock_cls.assert_called_once_with("sk-test")
