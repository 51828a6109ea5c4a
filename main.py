"""
Slack Auto-Archiver - joins public channels and archives the ones that went quiet
Meant to be run once per invocation from a scheduler
"""


import sys
import signal
import asyncio
import logging
from typing import Optional

from pydantic import ValidationError
from slack_bolt.async_app import AsyncApp

from core.config import Settings
from core.logging import configure_logging
from services.errors import AutoArchiverError
from services.slack_gateway import SlackChannelGateway
from services.workflow import AutoArchiveWorkflow


EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def load_settings():
    """Read settings from the environment, or None when they don't parse"""
    try:
        return Settings()
    except ValidationError as e:
        configure_logging()
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            logging.error(f"Invalid setting AUTO_ARCHIVER_{field}: {error['msg']}")
        return None


async def main(settings: Optional[Settings] = None) -> int:
    """Main entry point"""
    if settings is None:
        settings = load_settings()
        if settings is None:
            return EXIT_FAILURE

    configure_logging(settings.VERBOSITY, settings.LOGGING_DIR, settings.SLACK_DEBUG)

    app = AsyncApp(token=settings.BOT_TOKEN)
    workflow = AutoArchiveWorkflow(SlackChannelGateway(app.client), settings)

    task = asyncio.current_task()
    loop = asyncio.get_running_loop()
    received = []

    def on_signal(signum):
        logging.warning(f"Received {signal.Signals(signum).name}, cancelling run")
        received.append(signum)
        task.cancel()

    for signum in HANDLED_SIGNALS:
        try:
            loop.add_signal_handler(signum, on_signal, signum)
        except (NotImplementedError, RuntimeError):
            pass

    try:
        await workflow.run()
    except AutoArchiverError as e:
        logging.error(f"Fatal error: {e}")
        return EXIT_FAILURE
    except asyncio.CancelledError:
        logging.warning("Run cancelled, remaining channels were not processed")
        # Ctrl-C keeps the shell convention, anything else is a failed run
        if signal.SIGINT in received:
            return EXIT_INTERRUPTED
        return EXIT_FAILURE
    finally:
        for signum in HANDLED_SIGNALS:
            try:
                loop.remove_signal_handler(signum)
            except (NotImplementedError, RuntimeError):
                pass

    return EXIT_OK


def cli():
    try:
        code = asyncio.run(main())
    except KeyboardInterrupt:
        logging.warning("Received shutdown signal")
        code = EXIT_INTERRUPTED
    sys.exit(code)




if __name__ == "__main__":
    cli()
