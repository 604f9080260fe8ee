"""
Tests for LLM providers
"""

import asyncio
import os

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp

from linkdump.config import LLMConfig
from linkdump.errors import LLMProviderError
from linkdump.llm.base import LLMProvider, LLMResponse
from linkdump.llm.litellm_provider import LiteLLMProvider
from linkdump.llm.openrouter_provider import OpenRouterProvider
from linkdump.llm.factory import LLMProviderFactory, LLMProviderType


def litellm_response(content="Generated response", usage=True):
    mock_response = MagicMock()
    mock_choice = MagicMock()
    mock_choice.message.content = content
    mock_choice.finish_reason = "stop"
    mock_response.choices = [mock_choice]
    if usage:
        mock_response.usage.prompt_tokens = 10
        mock_response.usage.completion_tokens = 5
        mock_response.usage.total_tokens = 15
    else:
        mock_response.usage = None
    return mock_response


class TestLLMResponse:
    """Test LLMResponse dataclass"""

    def test_llm_response_defaults(self):
        """Test LLMResponse with default values"""
        response = LLMResponse(content="Test", model="test")

        assert response.usage is None
        assert response.finish_reason is None


class TestLLMProvider:
    """Test base LLMProvider class"""

    def test_abstract_methods(self):
        """Test that base class requires implementation of abstract methods"""
        with pytest.raises(TypeError):
            LLMProvider("test_key", "test_model")

    @pytest.mark.asyncio
    async def test_context_manager_returns_provider(self):
        """Test the default async context manager"""
        provider = LiteLLMProvider("test_key", "test_model")

        async with provider as p:
            assert p is provider


class TestLiteLLMProvider:
    """Test LiteLLM provider"""

    def test_initialization_with_config(self):
        """Test initialization with additional config"""
        provider = LiteLLMProvider("test_key", "test_model", base_url="https://test.com", timeout=10)

        assert provider.config == {"base_url": "https://test.com", "timeout": 10}
        assert provider.timeout == 10

    def test_validate_config_missing_key(self):
        """Test config validation with missing API key"""
        provider = LiteLLMProvider("", "test_model")

        with pytest.raises(ValueError, match="API key is required"):
            provider.validate_config()

    def test_validate_config_missing_model(self):
        """Test config validation with missing model"""
        provider = LiteLLMProvider("test_key", "")

        with pytest.raises(ValueError, match="Model is required"):
            provider.validate_config()

    @pytest.mark.asyncio
    @patch('litellm.acompletion', new_callable=AsyncMock)
    async def test_generate_success(self, mock_acompletion):
        """Test successful generation"""
        mock_acompletion.return_value = litellm_response()

        provider = LiteLLMProvider("test_key", "test_model")
        response = await provider.generate("Test prompt")

        assert response.content == "Generated response"
        assert response.model == "test_model"
        assert response.usage == {
            "prompt_tokens": 10,
            "completion_tokens": 5,
            "total_tokens": 15
        }
        assert response.finish_reason == "stop"

        mock_acompletion.assert_called_once_with(
            model="test_model",
            messages=[{"role": "user", "content": "Test prompt"}],
            api_key="test_key",
            timeout=30,
            temperature=0.3,
            max_tokens=300
        )

    @pytest.mark.asyncio
    @patch('litellm.acompletion', new_callable=AsyncMock)
    async def test_generate_with_custom_params(self, mock_acompletion):
        """Test generation with custom parameters and base url"""
        mock_acompletion.return_value = litellm_response(usage=False)

        provider = LiteLLMProvider("test_key", "test_model", base_url="https://proxy.test")
        response = await provider.generate("Test prompt", temperature=0.5, max_tokens=100)

        assert response.usage is None
        kwargs = mock_acompletion.call_args.kwargs
        assert kwargs["temperature"] == 0.5
        assert kwargs["max_tokens"] == 100
        assert kwargs["api_base"] == "https://proxy.test"

    @pytest.mark.asyncio
    @patch('litellm.acompletion', new_callable=AsyncMock)
    async def test_generate_failure(self, mock_acompletion):
        """Test backend errors become LLMProviderError"""
        mock_acompletion.side_effect = RuntimeError("rate limited")

        provider = LiteLLMProvider("test_key", "test_model")
        with pytest.raises(LLMProviderError, match="rate limited"):
            await provider.generate("Test prompt")

    @pytest.mark.asyncio
    @patch('litellm.acompletion', new_callable=AsyncMock)
    async def test_generate_empty_content(self, mock_acompletion):
        mock_acompletion.return_value = litellm_response(content="")

        provider = LiteLLMProvider("test_key", "test_model")
        with pytest.raises(LLMProviderError, match="empty"):
            await provider.generate("Test prompt")


class TestOpenRouterProvider:
    """Test OpenRouter provider"""

    def test_initialization(self):
        provider = OpenRouterProvider("test_key", "openai/gpt-4o")

        assert provider.model == "openai/gpt-4o"
        assert provider.session is None

    @pytest.mark.asyncio
    @patch('aiohttp.ClientSession.post')
    async def test_generate_success(self, mock_post):
        """Test successful generation with OpenRouter"""
        mock_response = MagicMock()
        mock_response.raise_for_status.return_value = None
        mock_response.json = AsyncMock(return_value={
            "choices": [{"message": {"content": "Generated response"}, "finish_reason": "stop"}],
            "model": "openai/gpt-4o",
            "usage": {"prompt_tokens": 10, "completion_tokens": 5}
        })
        mock_post.return_value.__aenter__.return_value = mock_response

        provider = OpenRouterProvider("test_key", "openai/gpt-4o", title="Test")

        async with provider as p:
            response = await p.generate("Test prompt", max_tokens=50)

        assert response.content == "Generated response"
        assert response.model == "openai/gpt-4o"
        assert response.usage == {"prompt_tokens": 10, "completion_tokens": 5}
        assert response.finish_reason == "stop"

        call = mock_post.call_args
        assert call.args[0] == "https://openrouter.ai/api/v1/chat/completions"
        assert call.kwargs["headers"]["Authorization"] == "Bearer test_key"
        assert call.kwargs["headers"]["X-Title"] == "Test"
        assert call.kwargs["json"]["max_tokens"] == 50

    @pytest.mark.asyncio
    @patch('aiohttp.ClientSession.post')
    async def test_generate_request_error(self, mock_post):
        """Test client errors become LLMProviderError"""
        mock_post.side_effect = aiohttp.ClientConnectionError("refused")

        async with OpenRouterProvider("test_key", "openai/gpt-4o") as provider:
            with pytest.raises(LLMProviderError, match="request failed"):
                await provider.generate("Test prompt")

    @pytest.mark.asyncio
    @patch('aiohttp.ClientSession.post')
    async def test_generate_timeout(self, mock_post):
        """Test a request that exceeds the client timeout becomes LLMProviderError"""
        mock_post.return_value.__aenter__.side_effect = asyncio.TimeoutError()

        async with OpenRouterProvider("test_key", "openai/gpt-4o", timeout=0.2) as provider:
            with pytest.raises(LLMProviderError, match="timed out after 0.2s"):
                await provider.generate("Test prompt")

    @pytest.mark.asyncio
    @patch('aiohttp.ClientSession.post')
    async def test_generate_unexpected_shape(self, mock_post):
        """Test a response without choices is rejected"""
        mock_response = MagicMock()
        mock_response.json = AsyncMock(return_value={"error": "nope"})
        mock_post.return_value.__aenter__.return_value = mock_response

        async with OpenRouterProvider("test_key", "openai/gpt-4o") as provider:
            with pytest.raises(LLMProviderError, match="Unexpected"):
                await provider.generate("Test prompt")

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test async context manager"""
        provider = OpenRouterProvider("test_key", "openai/gpt-4o")

        async with provider as p:
            assert p.session is not None

        # Session should be closed after exiting context
        assert provider.session is None


class TestLLMProviderFactory:
    """Test LLM provider factory"""

    def test_create_openrouter_provider(self):
        """Test creating OpenRouter provider"""
        provider = LLMProviderFactory.create_provider(
            LLMProviderType.OPENROUTER,
            "test_key",
            "openai/gpt-4o"
        )

        assert isinstance(provider, OpenRouterProvider)
        assert provider.api_key == "test_key"

    def test_create_unknown_provider(self):
        """Test creating unknown provider type"""
        with pytest.raises(ValueError, match="Unknown provider type"):
            LLMProviderFactory.create_provider("unknown", "test_key", "gpt-4")

    @patch.dict(os.environ, {'LINKDUMP_TEST_KEY': 'secret'})
    def test_from_config(self):
        """Test creating provider from the llm config section"""
        config = LLMConfig(provider="OpenRouter", model="m", api_key_env="LINKDUMP_TEST_KEY", timeout=5)

        provider = LLMProviderFactory.from_config(config)

        assert isinstance(provider, OpenRouterProvider)
        assert provider.api_key == "secret"
        assert provider.model == "m"
        assert provider.timeout == 5

    def test_from_config_missing_key(self):
        config = LLMConfig(api_key_env="LINKDUMP_UNSET_KEY")
        with pytest.raises(ValueError, match="LINKDUMP_UNSET_KEY is required"):
            LLMProviderFactory.from_config(config)

    def test_from_config_invalid_provider(self):
        with pytest.raises(ValueError, match="Invalid provider type in llm.provider"):
            LLMProviderFactory.from_config(LLMConfig(provider="bogus"))

    @patch.dict(os.environ, {
        'LINKDUMP_TEST_KEY': 'secret',
        'OPENROUTER_REFERER': 'https://example.com',
        'OPENROUTER_TITLE': 'My Links'
    })
    def test_from_config_openrouter_headers(self):
        """Test OpenRouter referer and title are read from the environment"""
        config = LLMConfig(provider="openrouter", model="m", api_key_env="LINKDUMP_TEST_KEY")

        provider = LLMProviderFactory.from_config(config)

        assert provider.config["referer"] == "https://example.com"
        assert provider.config["title"] == "My Links"

    @patch.dict(os.environ, {'LINKDUMP_TEST_KEY': 'secret', 'OPENROUTER_TITLE': 'My Links'})
    def test_from_config_litellm_ignores_openrouter_headers(self):
        config = LLMConfig(provider="litellm", model="m", api_key_env="LINKDUMP_TEST_KEY")

        provider = LLMProviderFactory.from_config(config)

        assert isinstance(provider, LiteLLMProvider)
        assert provider.config == {"timeout": 30}

    def test_get_available_providers(self):
        providers = LLMProviderFactory.get_available_providers()

        assert set(providers) == {"litellm", "openrouter"}
