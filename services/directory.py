import logging
from typing import List

from models.data_models import Channel, Identity
from services.errors import DirectoryError, SLACK_CALL_ERRORS
from services.slack_gateway import ChannelGateway


class ChannelDirectory:
    """Reads the workspace channel listing"""

    def __init__(self, gateway: ChannelGateway):
        self.gateway = gateway





    async def whoami(self) -> Identity:
        """Resolve the identity this run acts as"""
        try:
            identity = await self.gateway.identify()
        except SLACK_CALL_ERRORS as e:
            raise DirectoryError(f"could not verify bot identity: {e}") from e

        logging.info(f"Running as bot user {identity.user_id} in team {identity.team or 'unknown'}")
        return identity





    async def get_unarchived_channels(self) -> List[Channel]:
        """Get all public channels and the private channels the bot can see"""
        logging.debug("Getting channels")
        channels = []
        try:
            async for channel in self.gateway.iter_channels():
                if channel.is_archived:
                    continue
                channels.append(channel)
        except SLACK_CALL_ERRORS as e:
            raise DirectoryError(f"could not list channels: {e}") from e

        logging.info(f"Found {len(channels)} unarchived channels")
        return channels
