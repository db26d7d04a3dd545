"""Tests for adapter framework."""

import logging

import httpx
import pytest

from provider_adapters.base_adapter import BaseAdapter, ProviderResponse, redact_headers
from provider_adapters.config import Settings, configure_logging
from provider_adapters.exceptions import (
    AdapterError, EmptyResponseArrayError, InvalidEncodingError, MalformedResponseError,
    ProviderError, RequestFailedError
)
from provider_adapters.factory import AdapterFactory
from provider_adapters.implementations.ai.openai_adapter import OpenAIAdapter
from provider_adapters.implementations.communication.discord_adapter import DiscordAdapter
from provider_adapters.implementations.integration.github_adapter import GitHubAdapter
from provider_adapters.models import AdapterCategory, AdapterConfig
from provider_adapters.registry import AdapterRegistry, adapter_registry


@pytest.fixture
def clean_registry():
    """Create a clean adapter registry."""
    return AdapterRegistry()


class TestErrorTaxonomy:
    """Every failure kind has its own stable code."""

    def test_error_codes(self):
        assert RequestFailedError().error_code == "request_failed"
        assert InvalidEncodingError().error_code == "invalid_encoding"
        assert MalformedResponseError().error_code == "malformed_response"
        assert EmptyResponseArrayError("choices").error_code == "empty_response_array"
        assert ProviderError().error_code == "provider_error"

    def test_all_kinds_are_adapter_errors(self):
        for error in (
            RequestFailedError(), InvalidEncodingError(), MalformedResponseError(),
            EmptyResponseArrayError("data"), ProviderError()
        ):
            assert isinstance(error, AdapterError)

    def test_malformed_response_keeps_raw_body(self):
        error = MalformedResponseError("bad", raw_body="{", status_code=500)

        assert error.details == {"raw_body": "{", "status_code": 500}
        assert str(error) == "bad"


class TestBaseAdapter:
    """Shared request and decode pipeline."""

    def test_auth_schemes(self):
        discord = DiscordAdapter(AdapterConfig(name="discord", category=AdapterCategory.COMMUNICATION))
        github = GitHubAdapter(AdapterConfig(name="github", category=AdapterCategory.INTEGRATION))
        openai = OpenAIAdapter(AdapterConfig(name="openai", category=AdapterCategory.AI))

        assert discord.build_headers("t") == {"Authorization": "Bot t"}
        assert github.build_headers("t") == {
            "Authorization": "Bearer t",
            "Accept": "application/vnd.github.v3+json"
        }
        assert openai.build_headers("t", has_body=True) == {
            "Authorization": "Bearer t",
            "Content-Type": "application/json"
        }

    def test_default_base_urls(self):
        settings = Settings()

        assert settings.DISCORD_API_BASE == "https://discord.com/api/v10"
        assert settings.GITHUB_API_BASE == "https://api.github.com"
        assert settings.OPENAI_API_BASE == "https://api.openai.com/v1"

    def test_settings_override_base_url(self):
        settings = Settings(GITHUB_API_BASE="http://ghe.local/api/v3", ADAPTER_TIMEOUT_SECONDS=5)
        adapter = GitHubAdapter(
            AdapterConfig(name="github", category=AdapterCategory.INTEGRATION),
            settings=settings
        )

        assert adapter.base_url == "http://ghe.local/api/v3"
        assert adapter.timeout_seconds == 5

    def test_configure_logging(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging(Settings(LOG_LEVEL="debug", LOG_FORMAT="%(message)s"))

        assert calls == [{"level": "DEBUG", "format": "%(message)s"}]

    def test_decode_text_rejects_invalid_utf8(self):
        adapter = OpenAIAdapter(AdapterConfig(name="openai", category=AdapterCategory.AI))

        with pytest.raises(InvalidEncodingError) as exc_info:
            adapter._decode_text(ProviderResponse(status_code=200, body=b"\x80"))

        assert exc_info.value.details["status_code"] == 200

    def test_first_on_empty_list(self):
        with pytest.raises(EmptyResponseArrayError):
            BaseAdapter._first([], "choices")

        assert BaseAdapter._first(["a", "b"], "choices") == "a"

    def test_redact_headers(self):
        headers = {"Authorization": "Bot secret", "Accept": "application/json"}

        assert redact_headers(headers) == {
            "Authorization": "***REDACTED***",
            "Accept": "application/json"
        }

    @pytest.mark.asyncio
    async def test_credential_not_logged(self, mock_provider, caplog):
        mock_provider.reply(200, {"id": "u1", "username": "a", "discriminator": "1"})
        adapter = DiscordAdapter(
            AdapterConfig(name="discord", category=AdapterCategory.COMMUNICATION),
            client=mock_provider.client
        )

        with caplog.at_level(logging.DEBUG, logger="provider_adapters"):
            await adapter.get_user("very-secret-token", "u1")

        assert caplog.records
        assert "very-secret-token" not in caplog.text

    def test_url_without_credential_path_is_unchanged(self):
        github = GitHubAdapter(AdapterConfig(name="github", category=AdapterCategory.INTEGRATION))

        assert github.redact_url("https://api.github.com/webhooks/1/abc") == "https://api.github.com/webhooks/1/abc"

    @pytest.mark.asyncio
    async def test_injected_client_is_shared_across_calls(self, mock_provider):
        mock_provider.reply(200, {"id": "u1", "username": "a", "discriminator": "1"})
        client = mock_provider.client
        adapter = DiscordAdapter(
            AdapterConfig(name="discord", category=AdapterCategory.COMMUNICATION),
            client=client
        )

        await adapter.get_user("tok", "u1")
        await adapter.get_user("tok", "u1")

        assert mock_provider.client is client
        assert not client.is_closed
        assert len(mock_provider.requests) == 2

    @pytest.mark.asyncio
    async def test_adapter_keeps_no_credential(self, mock_provider):
        mock_provider.reply(200, {"id": "u1", "username": "a", "discriminator": "1"})
        adapter = DiscordAdapter(
            AdapterConfig(name="discord", category=AdapterCategory.COMMUNICATION),
            client=mock_provider.client
        )

        await adapter.get_user("very-secret-token", "u1")

        assert "very-secret-token" not in repr(vars(adapter))

    @pytest.mark.asyncio
    async def test_without_injected_client(self, monkeypatch):
        """Each call opens its own client when none was injected."""
        transport = httpx.MockTransport(lambda request: httpx.Response(204))
        real_client = httpx.AsyncClient
        monkeypatch.setattr(
            httpx, "AsyncClient",
            lambda **kwargs: real_client(transport=transport, **kwargs)
        )
        adapter = GitHubAdapter(AdapterConfig(name="github", category=AdapterCategory.INTEGRATION))

        assert await adapter.delete_repository("ghp", "o", "r") is True


class TestAdapterRegistry:
    """Registry bookkeeping."""

    def test_register_and_create(self, clean_registry):
        clean_registry.register_adapter_class("discord", DiscordAdapter)

        adapter = clean_registry.create_adapter(
            "discord",
            AdapterConfig(name="discord", category=AdapterCategory.COMMUNICATION)
        )

        assert clean_registry.get_adapter("discord-1.0.0") is adapter
        assert clean_registry.get_adapters_by_category(AdapterCategory.COMMUNICATION) == [adapter]

    def test_register_rejects_non_adapter(self, clean_registry):
        with pytest.raises(ValueError):
            clean_registry.register_adapter_class("dict", dict)

    def test_create_unknown_class(self, clean_registry):
        with pytest.raises(ValueError):
            clean_registry.create_adapter("slack", AdapterConfig(name="slack", category=AdapterCategory.COMMUNICATION))

    def test_duplicate_adapter(self, clean_registry):
        clean_registry.register_adapter_class("openai", OpenAIAdapter)
        config = AdapterConfig(name="openai", category=AdapterCategory.AI)
        clean_registry.create_adapter("openai", config)

        with pytest.raises(ValueError):
            clean_registry.create_adapter("openai", config)

    def test_find_by_capability(self, clean_registry):
        discord = clean_registry.add_adapter(
            DiscordAdapter(AdapterConfig(name="discord", category=AdapterCategory.COMMUNICATION))
        )
        github = clean_registry.add_adapter(
            GitHubAdapter(AdapterConfig(name="github", category=AdapterCategory.INTEGRATION))
        )

        assert clean_registry.get_adapters_by_capability("get_user") == [discord, github]
        assert clean_registry.get_adapters_by_capability("create_issue") == [github]

    def test_list_and_remove(self, clean_registry):
        clean_registry.add_adapter(OpenAIAdapter(AdapterConfig(name="openai", category=AdapterCategory.AI)))

        infos = clean_registry.list_adapters(category=AdapterCategory.AI)
        assert [info.id for info in infos] == ["openai-1.0.0"]
        assert infos[0].base_url == "https://api.openai.com/v1"
        assert clean_registry.list_adapters(category=AdapterCategory.COMMUNICATION) == []

        assert clean_registry.remove_adapter("openai-1.0.0") is True
        assert clean_registry.remove_adapter("openai-1.0.0") is False


class TestAdapterFactory:
    """Creating adapters by type name."""

    @pytest.mark.parametrize("adapter_type,adapter_class,category", [
        ("discord", DiscordAdapter, AdapterCategory.COMMUNICATION),
        ("GitHub", GitHubAdapter, AdapterCategory.INTEGRATION),
        ("openai", OpenAIAdapter, AdapterCategory.AI),
    ])
    def test_create_adapter(self, adapter_type, adapter_class, category):
        adapter = AdapterFactory.create_adapter(adapter_type)

        assert isinstance(adapter, adapter_class)
        assert adapter.config.category == category

    def test_create_adapter_with_config(self):
        adapter = AdapterFactory.create_adapter(
            "openai",
            {"name": "azure-proxy", "base_url": "http://proxy.local/v1", "timeout_seconds": 10}
        )

        assert adapter.id == "azure-proxy-1.0.0"
        assert adapter.base_url == "http://proxy.local/v1"
        assert adapter.timeout_seconds == 10

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            AdapterFactory.create_adapter("slack")

    def test_create_and_register(self):
        adapter = AdapterFactory.create_and_register_adapter("github")

        assert adapter_registry.get_adapter(adapter.id) is adapter
        assert adapter_registry.get_adapter_class("github") is GitHubAdapter

    def test_available_adapters(self):
        assert set(AdapterFactory.get_available_adapters()) == {"discord", "github", "openai"}
