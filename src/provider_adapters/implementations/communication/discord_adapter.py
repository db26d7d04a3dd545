"""Discord adapter implementation."""

import logging
import re
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel, Field, NonNegativeInt

from provider_adapters.base_adapter import BaseAdapter, CapabilityHandler, ProviderResponse, WireModel
from provider_adapters.config import Settings
from provider_adapters.models import AdapterCapability, AdapterCategory, AdapterConfig


logger = logging.getLogger(__name__)


# Public results

class Webhook(BaseModel):
    """A channel webhook."""
    id: str
    token: str
    url: str


class Channel(BaseModel):
    """A guild or DM channel."""
    id: str
    name: str
    ty: int
    guild_id: Optional[str] = None


class User(BaseModel):
    """A Discord user."""
    id: str
    username: str
    discriminator: str
    avatar: Optional[str] = None


class Message(BaseModel):
    """A message to post into a channel."""
    channel_id: str
    content: str
    guild_id: Optional[str] = None


# Wire shapes

class _DiscordWebhook(WireModel):
    id: str
    token: str
    url: str


class _DiscordChannel(WireModel):
    id: str
    name: str
    ty: NonNegativeInt = Field(alias="type")
    guild_id: Optional[str] = None


class _DiscordUser(WireModel):
    id: str
    username: str
    discriminator: str
    avatar: Optional[str] = None


class _DiscordEnvelope(WireModel):
    id: str


class DiscordAdapter(BaseAdapter):
    """Adapter for the Discord REST API."""

    AUTH_SCHEME = "Bot"
    BASE_URL_SETTING = "DISCORD_API_BASE"
    SENSITIVE_PATH = re.compile(r"(/webhooks/[^/]+/)[^/?#]+")

    def __init__(
        self,
        config: AdapterConfig,
        client: Optional[httpx.AsyncClient] = None,
        settings: Optional[Settings] = None
    ):
        # Ensure category is set correctly
        config.category = AdapterCategory.COMMUNICATION
        super().__init__(config, client=client, settings=settings)

    def get_capabilities(self) -> List[AdapterCapability]:
        """Return Discord adapter capabilities."""
        token = {"type": "string", "description": "Bot token"}
        return [
            # Webhooks
            AdapterCapability(
                name="create_webhook",
                description="Create a webhook in a channel",
                category="webhooks",
                parameters={
                    "token": token,
                    "channel_id": {"type": "string", "description": "Channel ID"},
                    "name": {"type": "string", "description": "Webhook name"}
                },
                required_parameters=["token", "channel_id", "name"],
                response_format={"id": "string", "token": "string", "url": "string"}
            ),
            AdapterCapability(
                name="delete_webhook",
                description="Delete a webhook using its token",
                category="webhooks",
                parameters={
                    "token": token,
                    "webhook_id": {"type": "string", "description": "Webhook ID"},
                    "webhook_token": {"type": "string", "description": "Webhook token"}
                },
                required_parameters=["token", "webhook_id", "webhook_token"],
                response_format={"type": "boolean"}
            ),
            AdapterCapability(
                name="send_webhook_message",
                description="Send a message through a webhook",
                category="webhooks",
                parameters={
                    "token": token,
                    "webhook": {"type": "object", "description": "Webhook with id, token and url"},
                    "content": {"type": "string", "description": "Message content"}
                },
                required_parameters=["token", "webhook", "content"],
                response_format={"type": "string", "description": "Message ID"}
            ),

            # Messaging
            AdapterCapability(
                name="send_message",
                description="Send a message to a Discord channel",
                category="messaging",
                parameters={
                    "token": token,
                    "message": {"type": "object", "description": "Message with channel_id, content and optional guild_id"}
                },
                required_parameters=["token", "message"],
                response_format={"type": "string", "description": "Message ID"}
            ),
            AdapterCapability(
                name="edit_message",
                description="Edit an existing message",
                category="messaging",
                parameters={
                    "token": token,
                    "channel_id": {"type": "string", "description": "Channel ID"},
                    "message_id": {"type": "string", "description": "Message ID"},
                    "content": {"type": "string", "description": "New content"}
                },
                required_parameters=["token", "channel_id", "message_id", "content"],
                response_format={"type": "boolean"}
            ),
            AdapterCapability(
                name="delete_message",
                description="Delete a message",
                category="messaging",
                parameters={
                    "token": token,
                    "channel_id": {"type": "string", "description": "Channel ID"},
                    "message_id": {"type": "string", "description": "Message ID"}
                },
                required_parameters=["token", "channel_id", "message_id"],
                response_format={"type": "boolean"}
            ),

            # Lookups
            AdapterCapability(
                name="get_channel",
                description="Get channel information",
                category="channel_management",
                parameters={
                    "token": token,
                    "channel_id": {"type": "string", "description": "Channel ID"}
                },
                required_parameters=["token", "channel_id"],
                response_format={"id": "string", "name": "string", "ty": "integer", "guild_id": "string"}
            ),
            AdapterCapability(
                name="get_user",
                description="Get user information",
                category="user_management",
                parameters={
                    "token": token,
                    "user_id": {"type": "string", "description": "User ID"}
                },
                required_parameters=["token", "user_id"],
                response_format={"id": "string", "username": "string", "discriminator": "string", "avatar": "string"}
            ),
        ]

    def _capability_handlers(self) -> Dict[str, CapabilityHandler]:
        return {
            "create_webhook": lambda p: self.create_webhook(p["token"], p["channel_id"], p["name"]),
            "delete_webhook": lambda p: self.delete_webhook(p["token"], p["webhook_id"], p["webhook_token"]),
            "send_webhook_message": lambda p: self.send_webhook_message(p["token"], p["webhook"], p["content"]),
            "send_message": lambda p: self.send_message(p["token"], p["message"]),
            "edit_message": lambda p: self.edit_message(p["token"], p["channel_id"], p["message_id"], p["content"]),
            "delete_message": lambda p: self.delete_message(p["token"], p["channel_id"], p["message_id"]),
            "get_channel": lambda p: self.get_channel(p["token"], p["channel_id"]),
            "get_user": lambda p: self.get_user(p["token"], p["user_id"]),
        }

    def _body_reports_success(self, response: ProviderResponse) -> bool:
        """Success check used by the delete and edit operations.

        Matches "200" anywhere in the body, including inside error messages
        and snowflake IDs. Discord answers a successful delete with an empty
        204, which this reports as failure. Kept for compatibility until the
        owners decide on a status code check.
        """
        return "200" in self._decode_text(response)

    # Webhooks

    async def create_webhook(self, token: str, channel_id: str, name: str) -> Webhook:
        """Create a webhook in a channel."""
        response = await self._send(
            "POST",
            f"/channels/{channel_id}/webhooks",
            token,
            json_body={"name": name}
        )
        webhook = self._decode(response, _DiscordWebhook)

        logger.info(f"Discord webhook {webhook.id} created in channel {channel_id}")
        return Webhook(id=webhook.id, token=webhook.token, url=webhook.url)

    async def delete_webhook(self, token: str, webhook_id: str, webhook_token: str) -> bool:
        """Delete a webhook."""
        response = await self._send("DELETE", f"/webhooks/{webhook_id}/{webhook_token}", token)
        deleted = self._body_reports_success(response)

        logger.info(f"Discord webhook {webhook_id} delete reported {deleted}")
        return deleted

    async def send_webhook_message(
        self,
        token: str,
        webhook: Union[Webhook, Dict[str, Any]],
        content: str
    ) -> str:
        """Post a message through a webhook and return its ID."""
        if not isinstance(webhook, Webhook):
            webhook = Webhook.model_validate(webhook)

        response = await self._send(
            "POST",
            f"/webhooks/{webhook.id}/{webhook.token}",
            token,
            json_body={"content": content}
        )
        envelope = self._decode(response, _DiscordEnvelope)

        logger.info(f"Discord webhook {webhook.id} posted message {envelope.id}")
        return envelope.id

    # Messaging

    async def send_message(self, token: str, message: Union[Message, Dict[str, Any]]) -> str:
        """Send a message to a channel and return its ID."""
        if not isinstance(message, Message):
            message = Message.model_validate(message)

        response = await self._send(
            "POST",
            f"/channels/{message.channel_id}/messages",
            token,
            json_body=message.model_dump(exclude={"channel_id"}, exclude_none=True)
        )
        envelope = self._decode(response, _DiscordEnvelope)

        logger.info(f"Discord message {envelope.id} sent to channel {message.channel_id}")
        return envelope.id

    async def edit_message(self, token: str, channel_id: str, message_id: str, content: str) -> bool:
        """Replace the content of a message."""
        response = await self._send(
            "PATCH",
            f"/channels/{channel_id}/messages/{message_id}",
            token,
            json_body={"content": content}
        )
        return self._body_reports_success(response)

    async def delete_message(self, token: str, channel_id: str, message_id: str) -> bool:
        """Delete a message."""
        response = await self._send("DELETE", f"/channels/{channel_id}/messages/{message_id}", token)
        return self._body_reports_success(response)

    # Lookups

    async def get_channel(self, token: str, channel_id: str) -> Channel:
        """Get a channel."""
        response = await self._send("GET", f"/channels/{channel_id}", token)
        channel = self._decode(response, _DiscordChannel)

        return Channel(
            id=channel.id,
            name=channel.name,
            ty=channel.ty,
            guild_id=channel.guild_id
        )

    async def get_user(self, token: str, user_id: str) -> User:
        """Get a user."""
        response = await self._send("GET", f"/users/{user_id}", token)
        user = self._decode(response, _DiscordUser)

        return User(
            id=user.id,
            username=user.username,
            discriminator=user.discriminator,
            avatar=user.avatar
        )
