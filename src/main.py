"""Entry point: configure logging, connect to Discord and run until signalled."""

from __future__ import annotations

import asyncio
import logging
import signal
import sys

import discord

from src.config import Settings, load_settings
from src.errors import ConfigurationError
from src.mclogs.client import MclogsClient
from src.pastebot.discord_bot import PasteBot
from src.pastebot.pipeline import UploadPipeline

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_bot(settings: Settings) -> PasteBot:
    pipeline = UploadPipeline(MclogsClient(base_url=settings.mclogs_base_url))
    return PasteBot(pipeline)


async def run(settings: Settings) -> None:
    """Run the bot until SIGINT/SIGTERM or until the gateway session dies.

    In-flight uploads are not awaited on shutdown.
    """
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    async with build_bot(settings) as bot:
        await bot.login(settings.discord_token)
        session = asyncio.create_task(bot.connect())
        stopper = asyncio.create_task(stop.wait())
        logger.info("Bot is now running. Press CTRL+C to exit.")

        done, _ = await asyncio.wait({session, stopper}, return_when=asyncio.FIRST_COMPLETED)
        logger.info("Shutting down...")
        stopper.cancel()
        await bot.close()
        if session in done:
            # connect() only returns early on a fatal gateway error
            session.result()


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging("INFO")
        logger.critical("No usable configuration: %s", exc)
        sys.exit(1)

    configure_logging(settings.log_level)
    try:
        asyncio.run(run(settings))
    except discord.LoginFailure as exc:
        logger.critical("Discord rejected the bot token: %s", exc)
        sys.exit(1)
    except (discord.DiscordException, OSError) as exc:
        logger.critical("Discord session failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
