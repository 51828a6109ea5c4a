from typing import AsyncIterator, Optional, Protocol

from slack_sdk.web.async_client import AsyncWebClient

from models.data_models import Channel, Identity, Message


CHANNEL_TYPES = "public_channel,private_channel"
PAGE_SIZE = 200


class ChannelGateway(Protocol):
    """The remote operations an archiver run needs"""

    async def identify(self) -> Identity: ...

    def iter_channels(self) -> AsyncIterator[Channel]: ...

    async def join(self, channel_id: str) -> None: ...

    def iter_history(self, channel_id: str, oldest: Optional[str]) -> AsyncIterator[Message]: ...

    async def archive(self, channel_id: str) -> None: ...



def _next_cursor(response) -> Optional[str]:
    metadata = response.get("response_metadata") or {}
    return metadata.get("next_cursor") or None



class SlackChannelGateway:
    """ChannelGateway backed by the Slack Web API"""

    def __init__(self, client: AsyncWebClient, page_size: int = PAGE_SIZE):
        self.client = client
        self.page_size = page_size





    async def identify(self) -> Identity:
        result = await self.client.auth_test()
        return Identity(user_id=result["user_id"], team=result.get("team", ""))





    async def iter_channels(self) -> AsyncIterator[Channel]:
        """Yield every non-archived channel visible to the bot, across all pages"""
        cursor = None
        while True:
            result = await self.client.conversations_list(
                types=CHANNEL_TYPES,
                exclude_archived=True,
                limit=self.page_size,
                cursor=cursor,
            )
            for channel in result["channels"]:
                yield Channel.from_api(channel)

            cursor = _next_cursor(result)
            if not cursor:
                break





    async def join(self, channel_id: str) -> None:
        await self.client.conversations_join(channel=channel_id)





    async def iter_history(self, channel_id: str, oldest: Optional[str]) -> AsyncIterator[Message]:
        """Yield messages no older than `oldest` (inclusive), following pagination"""
        cursor = None
        while True:
            params = {
                "channel": channel_id,
                "limit": self.page_size,
                "cursor": cursor,
            }
            if oldest is not None:
                params["oldest"] = oldest
                params["inclusive"] = True

            result = await self.client.conversations_history(**params)
            for message in result.get("messages", []):
                yield Message.from_api(message)

            cursor = _next_cursor(result)
            if not (result.get("has_more") and cursor):
                break





    async def archive(self, channel_id: str) -> None:
        await self.client.conversations_archive(channel=channel_id)
