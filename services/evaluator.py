import logging
from typing import Callable, Iterable, Optional
from datetime import datetime, timedelta, timezone

from models.data_models import Channel, EvaluationResult
from services.errors import SLACK_CALL_ERRORS, slack_error_code
from services.slack_gateway import ChannelGateway


def utc_now() -> datetime:
    return datetime.now(timezone.utc)



class ArchivabilityEvaluator:
    """Decides which channels have gone quiet for longer than the archive threshold.

    A channel is kept as soon as one message inside the lookback window was
    written by a person or a bot. Join notices, topic changes and other
    system messages don't count, so a window holding only those (or nothing
    at all) makes the channel archivable.

    A threshold of 0 days removes the lower bound on history entirely: the
    channel is archivable only if it never had a qualifying message.
    """

    def __init__(self, gateway: ChannelGateway, threshold_days: int, clock: Callable[[], datetime] = utc_now):
        if threshold_days < 0:
            raise ValueError(f"archive threshold must be >= 0, got {threshold_days}")
        self.gateway = gateway
        self.threshold_days = threshold_days
        self.clock = clock





    def lookback_boundary(self) -> Optional[datetime]:
        """Oldest point in time a message can have and still keep a channel alive"""
        if self.threshold_days == 0:
            return None
        return self.clock() - timedelta(days=self.threshold_days)





    def oldest_timestamp(self) -> Optional[str]:
        """The lookback boundary in the unix-seconds form conversations.history expects"""
        boundary = self.lookback_boundary()
        if boundary is None:
            return None
        return str(int(boundary.timestamp()))





    async def is_archivable(self, channel: Channel, oldest: Optional[str] = None) -> bool:
        if oldest is None:
            oldest = self.oldest_timestamp()

        logging.debug(f"Getting message history of #{channel.name} since {oldest or 'the beginning'}")
        async for message in self.gateway.iter_history(channel.id, oldest):
            logging.debug(f"#{channel.name}: message ts={message.ts} subtype={message.subtype!r}")
            if message.kind.counts_as_activity:
                return False

        return True





    async def find_archivable_channels(self, channels: Iterable[Channel]) -> EvaluationResult:
        """Sort channels into archivable, kept and skipped (history unavailable)"""
        # One boundary for the whole run so every channel is judged against the same window
        oldest = self.oldest_timestamp()

        archivable = []
        kept = []
        skipped = []
        for channel in channels:
            logging.debug(f"Checking if #{channel.name} should be archived")
            try:
                if await self.is_archivable(channel, oldest):
                    archivable.append(channel)
                else:
                    kept.append(channel)
            except SLACK_CALL_ERRORS as e:
                logging.error(
                    f"Could not determine if #{channel.name} is archivable: {slack_error_code(e) or e}"
                )
                skipped.append(channel)

        logging.info(
            f"Evaluated {len(archivable) + len(kept) + len(skipped)} channels: "
            f"{len(archivable)} archivable, {len(kept)} active, {len(skipped)} skipped"
        )
        return EvaluationResult(
            archivable=tuple(archivable),
            kept=tuple(kept),
            skipped=tuple(skipped),
        )
