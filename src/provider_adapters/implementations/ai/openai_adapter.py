"""OpenAI adapter implementation."""

import logging
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel

from provider_adapters.base_adapter import BaseAdapter, CapabilityHandler, WireModel
from provider_adapters.config import Settings
from provider_adapters.models import AdapterCapability, AdapterCategory, AdapterConfig


logger = logging.getLogger(__name__)


# Requests

class ChatMessage(BaseModel):
    """One message of a chat conversation."""
    role: str
    content: str


class ChatCompletion(BaseModel):
    """A chat completion request.

    Unset ``temperature`` and ``max_tokens`` are left out of the request body
    so the provider applies its own defaults.
    """
    model: str
    messages: List[ChatMessage]
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


class Embedding(BaseModel):
    """An embedding request for a single input string."""
    model: str
    input: str


# Results

class ChatResponse(BaseModel):
    id: str
    model: str
    content: str
    finish_reason: str


class EmbeddingResponse(BaseModel):
    model: str
    embedding: List[float]


# Wire shapes

class _OpenAIMessage(WireModel):
    content: str


class _OpenAIChoice(WireModel):
    message: _OpenAIMessage
    finish_reason: str


class _OpenAIChatResponse(WireModel):
    id: str
    model: str
    choices: List[_OpenAIChoice]


class _OpenAIEmbeddingData(WireModel):
    embedding: List[float]


class _OpenAIEmbeddingResponse(WireModel):
    model: str
    data: List[_OpenAIEmbeddingData]


class OpenAIAdapter(BaseAdapter):
    """Adapter for OpenAI API integration."""

    AUTH_SCHEME = "Bearer"
    BASE_URL_SETTING = "OPENAI_API_BASE"

    def __init__(
        self,
        config: AdapterConfig,
        client: Optional[httpx.AsyncClient] = None,
        settings: Optional[Settings] = None
    ):
        # Ensure category is set correctly
        config.category = AdapterCategory.AI
        super().__init__(config, client=client, settings=settings)

    def get_capabilities(self) -> List[AdapterCapability]:
        """Return OpenAI adapter capabilities."""
        return [
            AdapterCapability(
                name="create_chat_completion",
                description="Generate a chat completion",
                category="text_generation",
                parameters={
                    "api_key": {"type": "string", "description": "OpenAI API key"},
                    "completion": {
                        "type": "object",
                        "description": "model, messages, optional temperature and max_tokens"
                    }
                },
                required_parameters=["api_key", "completion"],
                response_format={
                    "id": "string",
                    "model": "string",
                    "content": "string",
                    "finish_reason": "string"
                }
            ),
            AdapterCapability(
                name="create_embedding",
                description="Generate an embedding vector for a text input",
                category="embeddings",
                parameters={
                    "api_key": {"type": "string", "description": "OpenAI API key"},
                    "embedding": {"type": "object", "description": "model and input"}
                },
                required_parameters=["api_key", "embedding"],
                response_format={"model": "string", "embedding": "array"}
            ),
        ]

    def _capability_handlers(self) -> Dict[str, CapabilityHandler]:
        return {
            "create_chat_completion": lambda p: self.create_chat_completion(p["api_key"], p["completion"]),
            "create_embedding": lambda p: self.create_embedding(p["api_key"], p["embedding"]),
        }

    async def create_chat_completion(
        self,
        api_key: str,
        completion: Union[ChatCompletion, Dict[str, Any]]
    ) -> ChatResponse:
        """Create a chat completion and return the first choice."""
        if not isinstance(completion, ChatCompletion):
            completion = ChatCompletion.model_validate(completion)

        response = await self._send(
            "POST",
            "/chat/completions",
            api_key,
            json_body=completion.model_dump(exclude_none=True)
        )
        chat = self._decode(response, _OpenAIChatResponse)
        choice = self._first(chat.choices, "choices")

        logger.info(f"OpenAI chat completion {chat.id} finished: {choice.finish_reason}")
        return ChatResponse(
            id=chat.id,
            model=chat.model,
            content=choice.message.content,
            finish_reason=choice.finish_reason
        )

    async def create_embedding(
        self,
        api_key: str,
        embedding: Union[Embedding, Dict[str, Any]]
    ) -> EmbeddingResponse:
        """Embed a single input and return its vector."""
        if not isinstance(embedding, Embedding):
            embedding = Embedding.model_validate(embedding)

        response = await self._send(
            "POST",
            "/embeddings",
            api_key,
            json_body=embedding.model_dump()
        )
        result = self._decode(response, _OpenAIEmbeddingResponse)
        data = self._first(result.data, "data")

        logger.info(f"OpenAI embedding from {result.model}: {len(data.embedding)} dimensions")
        return EmbeddingResponse(model=result.model, embedding=data.embedding)
