from discord.ext import commands

from utils.constants import OVERALL
from utils.rankings import filter_for_view, parse_view, sort_for_view
from utils.ui_components import LeaderboardView, create_gamemodes_embed


class Leaderboard(commands.Cog):
    """Handles tier list leaderboards."""

    def __init__(self, bot):
        self.bot = bot

    @commands.cooldown(1, 5, commands.BucketType.user)
    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.command()
    async def leaderboard(self, ctx, view: str = OVERALL):
        """Prints a leaderboard.

        Usage: !leaderboard [gamemode]
        Prints overall rankings by default, or the rankings of a single
        gamemode. Use !gamemodes to list them.
        """
        parsed_view = parse_view(view)
        if parsed_view is None:
            return await ctx.send(
                f"Unknown leaderboard '{view}'. Use !gamemodes to list them.",
            )
        players = await self.bot.db_service.get_all_players()
        ranked = sort_for_view(filter_for_view(players, parsed_view), parsed_view)
        if not ranked:
            return await ctx.send("No players are ranked here yet.")
        leaderboard_view = LeaderboardView(ranked, parsed_view)
        message = await ctx.send(
            embed=leaderboard_view.current_embed(),
            view=leaderboard_view,
        )
        leaderboard_view.message = message

    @commands.bot_has_permissions(send_messages=True, embed_links=True)
    @commands.command()
    async def gamemodes(self, ctx):
        """Lists every leaderboard.

        Usage: !gamemodes
        """
        await ctx.send(embed=create_gamemodes_embed())

async def setup(bot):
    await bot.add_cog(Leaderboard(bot))
