import logging
from typing import Iterable

from models.data_models import Channel, ReconciliationResult
from services.errors import ReconciliationError, SLACK_CALL_ERRORS, is_unrecoverable, slack_error_code
from services.slack_gateway import ChannelGateway


class MembershipReconciler:
    """Joins the public channels the bot is not yet a member of.

    Private channels are never joined here: the bot has to be invited to
    them by hand before they can be auto-archived.
    """

    def __init__(self, gateway: ChannelGateway):
        self.gateway = gateway





    async def join_public_channels(self, channels: Iterable[Channel]) -> ReconciliationResult:
        members = []
        joined = []
        failed = []
        skipped_private = []

        for channel in channels:
            if channel.is_member:
                members.append(channel)
                continue

            if channel.is_private:
                logging.debug(f"Not a member of private channel #{channel.name}, skipping")
                skipped_private.append(channel)
                continue

            logging.info(f"Not a member of public channel #{channel.name}, joining channel")
            try:
                await self.gateway.join(channel.id)
            except SLACK_CALL_ERRORS as e:
                if is_unrecoverable(e):
                    raise ReconciliationError(f"failed to join #{channel.name}: {e}") from e
                logging.error(f"Failed to join #{channel.name}: {slack_error_code(e) or e}")
                failed.append(channel)
                continue

            member = channel.as_member()
            members.append(member)
            joined.append(member)

        logging.info(
            f"Membership reconciled: {len(joined)} joined, {len(failed)} failed, "
            f"{len(skipped_private)} private channels skipped"
        )
        return ReconciliationResult(
            members=tuple(members),
            joined=tuple(joined),
            failed=tuple(failed),
            skipped_private=tuple(skipped_private),
        )
