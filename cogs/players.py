from discord.ext import commands

from utils.helpers import parse_username
from utils.mojang_api import get_uuid
from utils.ui_components import (
    PlayerProfileView,
    create_player_embed,
    create_points_embed,
    create_titles_embed,
)


class Players(commands.Cog):
    """Handles player lookups and tier list info."""

    def __init__(self, bot):
        self.bot = bot

    @commands.cooldown(1, 5, commands.BucketType.user)
    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.command()
    async def player(self, ctx, *, identifier):
        """Shows a player's profile.

        Usage: !player <username or uuid>
        Lists every gamemode tier, overall points and achievement title.
        """
        player = await self.bot.db_service.find_player(identifier)
        if player is None:
            return await ctx.send(f"{identifier.strip()} is not on the tier list.")
        await ctx.send(
            embed=create_player_embed(player),
            view=PlayerProfileView(player),
        )

    @commands.cooldown(1, 5, commands.BucketType.user)
    @commands.bot_has_permissions(send_messages=True)
    @commands.command()
    async def uuid(self, ctx, username):
        """Looks up a Minecraft UUID.

        Usage: !uuid <username>
        """
        parsed = parse_username(username)
        if not parsed:
            return await ctx.send(
                "Invalid input, usernames are 3-16 letters, numbers or underscores.",
            )
        profile = await get_uuid(self.bot.session, parsed)
        await ctx.send(f"{profile['username']}: `{profile['uuid']}`")

    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.command()
    async def titles(self, ctx):
        """Explains achievement titles.

        Usage: !titles
        """
        await ctx.send(embed=create_titles_embed())

    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.command()
    async def points(self, ctx):
        """Explains how overall points are calculated.

        Usage: !points
        """
        await ctx.send(embed=create_points_embed())

async def setup(bot):
    await bot.add_cog(Players(bot))
