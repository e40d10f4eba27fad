"""
Ranked announcer bot

Workflow:
1. Load settings from `.env` / environment / config.yaml
2. Register slash commands on the command tree
3. On first ready, start the background jobs (ranked match watcher)
4. Stop the jobs when the client closes
"""

import logging
import sys

import discord
from discord import app_commands

from commands.registry import register_commands
from config import Settings
from jobs import JobRunner
from watcher import build_watcher_job

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class RankedBot(discord.Client):
    """Discord client running slash commands and the interval jobs"""

    def __init__(self, settings: Settings):
        super().__init__(intents=discord.Intents.default())
        self.settings = settings
        self.tree = app_commands.CommandTree(self)
        self.jobs = JobRunner()
        self._jobs_started = False

    async def setup_hook(self) -> None:
        register_commands(self.tree)

        job = build_watcher_job(self.settings, self)
        if job is not None:
            self.jobs.register(job)

    async def on_ready(self) -> None:
        logger.info("Logged in as %s", self.user)
        # on_ready fires again after reconnects
        if self._jobs_started:
            return
        self._jobs_started = True
        self.jobs.start_all(self)

    async def close(self) -> None:
        self.jobs.stop_all()
        await super().close()


def main() -> int:
    """Entry point"""
    setup_logging()
    settings = Settings.load()

    if not settings.token:
        logger.error("Missing TOKEN in environment. Create a .env file based on .env.example")
        return 1

    bot = RankedBot(settings)
    bot.run(settings.token, log_handler=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
