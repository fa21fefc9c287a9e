import contextlib

import discord
from discord.ext import commands

from utils.exceptions import (
    DatabaseError,
    DuplicatePlayerError,
    MojangAPIError,
    PlayerNotFoundError,
    RateLimitError,
    UserNotFoundError,
)
from utils.logger_config import logger


class Management(commands.Cog):
    """Handles bot command errors, cooldowns, and permissions."""

    def __init__(self, bot):
        self.bot = bot

    @commands.Cog.listener()
    async def on_command_error(
          self,
          ctx: commands.Context,
          error: commands.CommandError,
    ):
        # Unwrap discord command error wrapper so we can access the original error.
        unwrapped_error = getattr(error, "original", error)
        if isinstance(unwrapped_error, commands.CommandNotFound):
            return await ctx.send(
                "Sorry, I don't know that command",
                delete_after=10,
            )
        if isinstance(unwrapped_error, commands.MissingRequiredArgument):
            return await ctx.send(
                "Missing arguments. Usage: "
                f"{ctx.clean_prefix}{ctx.command} {ctx.command.signature}",
                delete_after=10,
            )
        if isinstance(unwrapped_error, commands.CommandOnCooldown):
            embed = discord.Embed(
                title = "Slow Down!",
                description = (
                    f"You're using '{ctx.command}' too fast. "
                    f"Try again in {round(unwrapped_error.retry_after, 2)}s."
                ),
                color=discord.Color.orange(),
            )
            return await ctx.send(
                embed=embed,
                delete_after=10,
            )
        if isinstance(unwrapped_error, commands.BotMissingPermissions):
            perms = unwrapped_error.missing_permissions
            logger.warning(f"Bot missing perms in {ctx.guild.id}: {perms}")
            with contextlib.suppress(discord.Forbidden):
                return await ctx.author.send(
                    f"I'm missing permissions (**{perms}**) in **{ctx.guild.name}**!",
                )
            return None
        if isinstance(unwrapped_error, commands.MissingPermissions):
            return await ctx.send(
                "You don't have permission to use this command.",
                delete_after=10,
            )
        if isinstance(unwrapped_error, commands.NoPrivateMessage):
            return await ctx.send("This command only works in a server.")
        if isinstance(unwrapped_error, UserNotFoundError):
            return await ctx.send(f"User Not Found: {unwrapped_error}")
        if isinstance(unwrapped_error, RateLimitError):
            return await ctx.send(
                f"Bot is busy, try again in a minute: {unwrapped_error}",
                delete_after=10,
            )
        if isinstance(unwrapped_error, MojangAPIError):
            return await ctx.send(f"Mojang API issue: {unwrapped_error}")
        if isinstance(unwrapped_error, (DuplicatePlayerError, PlayerNotFoundError)):
            return await ctx.send(str(unwrapped_error))
        if isinstance(unwrapped_error, DatabaseError):
            return await ctx.send(f"Database issue: {unwrapped_error}")
        logger.error(
            f"❌ ERROR: {unwrapped_error}",
            exc_info=unwrapped_error,
        )
        return await ctx.send("An unexpected error occurred.")

async def setup(bot):
    await bot.add_cog(Management(bot))
