from discord.ext import commands

from utils.exceptions import PlayerNotFoundError
from utils.helpers import (
    parse_gamemode,
    parse_region,
    parse_tier_assignments,
    parse_username,
    valid_region,
)
from utils.logger_config import logger
from utils.models import Player
from utils.mojang_api import get_uuid
from utils.tiers import parse_tier

CLEAR_TIER_WORDS = ("none", "unranked", "-")


class Admin(commands.Cog):
    """Handles tier list administration.

    Every command here needs the Manage Server permission.
    """

    def __init__(self, bot):
        self.bot = bot

    async def _require_player(self, identifier):
        player = await self.bot.db_service.find_player(identifier)
        if player is None:
            raise PlayerNotFoundError(f"{identifier} is not on the tier list.")
        return player

    @commands.guild_only()
    @commands.has_permissions(manage_guild=True)
    @commands.bot_has_permissions(send_messages=True)
    @commands.cooldown(1, 3, commands.BucketType.user)
    @commands.command()
    async def addplayer(self, ctx, username, region, *assignments):
        """Adds a player to the tier list.

        Usage: !addplayer <username> <region> <gamemode=tier>...
        Example: !addplayer Steve NA sword=HT1 axe=LT3
        At least one gamemode tier is required.
        """
        parsed_username = parse_username(username)
        parsed_region = parse_region(region)
        tiers = parse_tier_assignments(assignments)
        if not parsed_username:
            return await ctx.send(
                "Invalid input, usernames are 3-16 letters, numbers or underscores.",
            )
        if not valid_region(parsed_region):
            return await ctx.send(f"Unknown region '{region}'. Use NA, EU, AS or OCE.")
        if not tiers:
            return await ctx.send(
                "Invalid input, please ensure syntax is: "
                "!addplayer username region gamemode=tier ...",
            )
        # API handling
        profile = await get_uuid(self.bot.session, parsed_username)
        # DB handling
        player = Player(
            username=profile["username"],
            uuid=profile["uuid"],
            region=parsed_region,
            tiers=tiers,
        )
        await self.bot.db_service.create_player(player)
        logger.info(f"{ctx.author} added {player.username}")
        await ctx.send(
            f"{player.username} has been added with {player.overall} points!",
        )

    @commands.guild_only()
    @commands.has_permissions(manage_guild=True)
    @commands.bot_has_permissions(send_messages=True)
    @commands.cooldown(1, 3, commands.BucketType.user)
    @commands.command()
    async def settier(self, ctx, identifier, gamemode, tier):
        """Sets or clears one gamemode tier.

        Usage: !settier <player> <gamemode> <tier|none>
        """
        parsed_gamemode = parse_gamemode(gamemode)
        if parsed_gamemode is None:
            return await ctx.send(
                f"Unknown gamemode '{gamemode}'. Use !gamemodes to list them.",
            )
        if tier.strip().lower() in CLEAR_TIER_WORDS:
            parsed_tier = ""
        else:
            parsed_tier = parse_tier(tier)
            if parsed_tier is None:
                return await ctx.send(f"Unknown tier '{tier}'. Use HT1 through LT5.")
        player = await self._require_player(identifier)
        updated = await self.bot.db_service.update_player(
            player.id,
            {parsed_gamemode.value: parsed_tier},
        )
        if not updated:
            raise PlayerNotFoundError(f"{player.username} is not on the tier list.")
        logger.info(f"{ctx.author} set {player.username} {parsed_gamemode.value}")
        if parsed_tier:
            await ctx.send(f"{player.username} is now {parsed_tier} in {parsed_gamemode.value}.")
        else:
            await ctx.send(f"{player.username} is now unranked in {parsed_gamemode.value}.")

    @commands.guild_only()
    @commands.has_permissions(manage_guild=True)
    @commands.bot_has_permissions(send_messages=True)
    @commands.cooldown(1, 3, commands.BucketType.user)
    @commands.command()
    async def setregion(self, ctx, identifier, region):
        """Changes a player's region.

        Usage: !setregion <player> <region>
        """
        parsed_region = parse_region(region)
        if not valid_region(parsed_region):
            return await ctx.send(f"Unknown region '{region}'. Use NA, EU, AS or OCE.")
        player = await self._require_player(identifier)
        updated = await self.bot.db_service.update_player(
            player.id,
            {"region": parsed_region},
        )
        if not updated:
            raise PlayerNotFoundError(f"{player.username} is not on the tier list.")
        await ctx.send(f"{player.username} is now in {parsed_region}.")

    @commands.guild_only()
    @commands.has_permissions(manage_guild=True)
    @commands.bot_has_permissions(send_messages=True)
    @commands.cooldown(1, 3, commands.BucketType.user)
    @commands.command()
    async def removeplayer(self, ctx, *, identifier):
        """Removes a player from the tier list.

        Usage: !removeplayer <player>
        """
        player = await self._require_player(identifier)
        deleted = await self.bot.db_service.delete_player(player.id)
        if not deleted:
            raise PlayerNotFoundError(f"{player.username} is not on the tier list.")
        logger.info(f"{ctx.author} removed {player.username}")
        await ctx.send(f"{player.username} has been removed.")

    @commands.guild_only()
    @commands.has_permissions(manage_guild=True)
    @commands.bot_has_permissions(send_messages=True)
    @commands.cooldown(1, 60, commands.BucketType.guild)
    @commands.command()
    async def migrate(self, ctx):
        """Copies players from the legacy single-tier list.

        Usage: !migrate
        Old tiers become sword tiers. Players already migrated are skipped.
        """
        summary = await self.bot.db_service.migrate_legacy_players()
        if summary["total"] == 0:
            return await ctx.send("No players found in the legacy tier list.")
        await ctx.send(
            f"Migration complete: {summary['added']} added, "
            f"{summary['skipped']} skipped, {summary['failed']} failed",
        )

async def setup(bot):
    await bot.add_cog(Admin(bot))
