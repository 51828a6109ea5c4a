import logging
from typing import Iterable

from models.data_models import ArchiveReport, Channel
from services.errors import SLACK_CALL_ERRORS, slack_error_code
from services.slack_gateway import ChannelGateway


class ChannelArchiver:
    """Archives channels one at a time; a failure never blocks the rest"""

    def __init__(self, gateway: ChannelGateway):
        self.gateway = gateway





    async def archive_channels(self, channels: Iterable[Channel]) -> ArchiveReport:
        archived = []
        failed = []

        for channel in channels:
            logging.info(f"Archiving channel #{channel.name}")
            try:
                await self.gateway.archive(channel.id)
            except SLACK_CALL_ERRORS as e:
                # TODO: post a message in the channel when archiving fails
                logging.error(f"Failed to archive #{channel.name}: {slack_error_code(e) or e}")
                failed.append(channel)
                continue
            archived.append(channel)

        return ArchiveReport(archived=tuple(archived), failed=tuple(failed))
