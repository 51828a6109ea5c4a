import logging

from core.config import Settings
from models.data_models import WorkflowResult
from services.archiver import ChannelArchiver
from services.directory import ChannelDirectory
from services.evaluator import ArchivabilityEvaluator, utc_now
from services.reconciler import MembershipReconciler
from services.slack_gateway import ChannelGateway


class AutoArchiveWorkflow:
    """One archiver run: list channels, join public ones, evaluate, archive"""

    def __init__(self, gateway: ChannelGateway, settings: Settings, clock=utc_now):
        self.settings = settings
        self.directory = ChannelDirectory(gateway)
        self.reconciler = MembershipReconciler(gateway)
        self.evaluator = ArchivabilityEvaluator(gateway, settings.ARCHIVE_THRESHOLD, clock=clock)
        self.archiver = ChannelArchiver(gateway)





    async def run(self) -> WorkflowResult:
        """Run every stage in order.

        DirectoryError and ReconciliationError abort the run. Per-channel
        failures are logged by each stage and reported in the result.
        """
        logging.info(f"Starting auto-archive run with a threshold of {self.settings.ARCHIVE_THRESHOLD} days")

        identity = await self.directory.whoami()
        channels = await self.directory.get_unarchived_channels()

        reconciliation = await self.reconciler.join_public_channels(channels)

        # Channels the bot couldn't join can't have their history read or be archived
        evaluation = await self.evaluator.find_archivable_channels(reconciliation.members)

        archive = await self.archiver.archive_channels(evaluation.archivable)

        logging.info(
            f"Auto-archive run finished: {len(channels)} channels, "
            f"{len(reconciliation.joined)} joined, {len(archive.archived)} archived, "
            f"{len(reconciliation.failed) + len(evaluation.skipped) + len(archive.failed)} failures"
        )
        return WorkflowResult(
            identity=identity,
            channels=tuple(channels),
            reconciliation=reconciliation,
            evaluation=evaluation,
            archive=archive,
        )
