import pytest

from docanalyzer.services.ai_service import build_prompt
from docanalyzer.services.providers import (
    AIProviderFactory,
    AnthropicProvider,
    MockProvider,
    OpenRouterProvider,
)
from docanalyzer.services.providers import factory as factory_module
from docanalyzer.utils.response_parser import parse_model_json


class TestAIProviderFactory:
    def test_mock_when_configured(self) -> None:
        assert isinstance(AIProviderFactory.get_provider("mock"), MockProvider)

    def test_mock_when_no_keys(self, monkeypatch) -> None:
        monkeypatch.setattr(factory_module, "OPENROUTER_API_KEY", None)
        monkeypatch.setattr(factory_module, "ANTHROPIC_API_KEY", None)
        assert isinstance(AIProviderFactory.get_provider("openrouter"), MockProvider)
        assert isinstance(AIProviderFactory.get_provider("anthropic"), MockProvider)

    def test_falls_back_to_other_configured_provider(self, monkeypatch) -> None:
        monkeypatch.setattr(factory_module, "OPENROUTER_API_KEY", None)
        monkeypatch.setattr(factory_module, "ANTHROPIC_API_KEY", "sk-ant-test")
        monkeypatch.setattr(factory_module, "AnthropicProvider", lambda: "anthropic-instance")
        assert AIProviderFactory.get_provider("openrouter") == "anthropic-instance"

    def test_unknown_provider_prefers_openrouter(self, monkeypatch) -> None:
        monkeypatch.setattr(factory_module, "OPENROUTER_API_KEY", "sk-or-test")
        monkeypatch.setattr(factory_module, "ANTHROPIC_API_KEY", "sk-ant-test")
        monkeypatch.setattr(factory_module, "OpenRouterProvider", lambda: "openrouter-instance")
        assert AIProviderFactory.get_provider("something-else") == "openrouter-instance"


class TestProvidersWithoutKeys:
    def test_openrouter_requires_key(self, monkeypatch) -> None:
        provider = OpenRouterProvider()
        provider.client = None
        with pytest.raises(ValueError, match="OpenRouter API key not configured"):
            provider.complete("prompt")

    def test_anthropic_requires_key(self) -> None:
        provider = AnthropicProvider()
        provider.client = None
        with pytest.raises(ValueError, match="Anthropic API key not configured"):
            provider.complete("prompt")


class FakeOpenAICompletions:
    def __init__(self):
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)

        class Message:
            content = '{"sentiment": "Neutral"}'

        class Choice:
            message = Message()

        class Response:
            choices = [Choice()]

        return Response()


class TestOpenRouterProvider:
    def test_sends_prompt_with_configured_sampling(self) -> None:
        provider = OpenRouterProvider(api_key="sk-or-test", model="test/model")
        completions = FakeOpenAICompletions()
        provider.client = type("Client", (), {"chat": type("Chat", (), {"completions": completions})()})()

        reply = provider.complete("Analyze this")

        assert reply == '{"sentiment": "Neutral"}'
        [call] = completions.calls
        assert call["model"] == "test/model"
        assert call["messages"] == [{"role": "user", "content": "Analyze this"}]
        assert call["temperature"] == 0.3
        assert call["max_tokens"] == 1000


class TestMockProvider:
    def test_reply_is_parseable_and_deterministic(self) -> None:
        prompt = build_prompt(["Great growth and excellent results for Acme this quarter."])
        provider = MockProvider()
        first = provider.complete(prompt)
        assert first == provider.complete(prompt)
        analysis = parse_model_json(first)
        assert analysis["sentiment"] == "Positive"
        assert set(analysis) == {"sentiment", "topics", "summary", "entities", "keyInsights", "confidence"}
        assert "Acme" in analysis["entities"]

    def test_neutral_for_plain_text(self) -> None:
        analysis = parse_model_json(MockProvider().complete(build_prompt(["The meeting is on Tuesday."])))
        assert analysis["sentiment"] == "Neutral"
