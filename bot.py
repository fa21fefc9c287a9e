import os
import sys

import aiohttp
import discord
from discord.ext import commands
from dotenv import load_dotenv

from database import database_startup
from utils.db_service import PlayerService
from utils.logger_config import logger
from utils.sentry_config import setup_sentry
from utils.ui_components import MyHelp

COGS = (
    "cogs.management",
    "cogs.leaderboard",
    "cogs.players",
    "cogs.admin",
)


class MyBot(commands.Bot):
    def __init__(self, db, prefix="!"):
        intents = discord.Intents.default()
        intents.message_content = True
        intents.guilds = True
        activity = discord.Activity(
            type=discord.ActivityType.watching,
            name=f"the tier list - {prefix}help",
        )
        super().__init__(
            command_prefix=prefix,
            intents=intents,
            activity=activity,
            help_command=MyHelp(),
        )
        self.db = db
        self.db_service = PlayerService(db)
        self.session = None  # placeholder

    async def setup_hook(self):
        # runs when the bot starts up.
        self.session = aiohttp.ClientSession()
        logger.info("✅ Persistent HTTP Session created.")
        for cog in COGS:
            await self.load_extension(cog)
        logger.info(f"✅ Loaded {len(COGS)} cogs.")

    async def close(self):
        # runs when the bot shuts down.
        if self.session:
            await self.session.close()
            logger.info("🛑 HTTP Session closed.")
        await super().close()

    async def on_ready(self):
        logger.info(f"✅ Bot connected as {self.user.name} (ID: {self.user.id})")


def main():
    load_dotenv()
    setup_sentry()
    token = os.getenv("DISCORD_TOKEN")
    if not token:
        logger.error("❌ ERROR: DISCORD_TOKEN is not set")
        sys.exit(1)
    db = database_startup()
    if not db:
        logger.error("❌ ERROR: Database did not properly initialize")
        sys.exit(1)
    bot = MyBot(db, prefix=os.getenv("BOT_PREFIX", "!"))
    bot.run(token, log_handler=None)


if __name__ == "__main__":
    main()
