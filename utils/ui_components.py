import contextlib
import math

import discord
from discord.ext import commands

from utils.achievements import classify
from utils.constants import (
    ACHIEVEMENT_TITLES,
    GAMEMODE_INFO,
    LEADERBOARD_PAGE_SIZE,
    NEUTRAL_COLOR,
    OVERALL,
    REGION_COLORS,
    Gamemode,
)
from utils.links import avatar_url, namemc_link
from utils.logger_config import logger
from utils.rankings import player_gamemodes
from utils.tiers import tier_color, tier_points_table, tier_rank


class MyHelp(commands.MinimalHelpCommand):
    def __init__(self):
        super().__init__(command_attrs={
            "checks": [commands.bot_has_permissions(
                send_messages=True,
                embed_links=True,
            ).predicate],
            "cooldown": commands.CooldownMapping.from_cooldown(
                1,
                3,
                commands.BucketType.user,
            ),
        })

    def add_bot_commands_formatting(self, commands, _heading):
        """This replaces the category heading with an 'Available Commands' label."""
        if commands:
            self.paginator.add_line("**Available Commands:**")
            for command in commands:
                self.add_subcommand_formatting(command)

    async def send_bot_help(self, mapping):
        self.paginator.add_line(
            "⚠️ **DISCLAIMER**: This bot is a community project and is not " \
            "affiliated with Mojang Studios.",
        )
        self.paginator.add_line(
            "**NOTE**: Use `!titles` and `!points` to see how overall points " \
            "and achievement titles work.",
        )
        self.paginator.add_line()
        await super().send_bot_help(mapping)

    def get_ending_note(self):
        """Adds a blank space before the 'Type !help command for more info' message."""
        return f"\n{super().get_ending_note()}"

    def get_opening_note(self):
        """Only returns the 'help [command]' instruction, removing the category line."""
        command_name = f"{self.context.clean_prefix}{self.invoked_with}"
        return f"Use `{command_name} [command]` for more info on a command."


def view_display_name(view):
    info = GAMEMODE_INFO.get(view)
    if info is None:
        return str(view)
    return info["display_name"]

def region_color(region):
    return REGION_COLORS.get(region, NEUTRAL_COLOR)

def position_prefix(position):
    if position == 1:
        return "🥇"
    elif position == 2:
        return "🥈"
    elif position == 3:
        return "🥉"
    return f"**{position}.**"

def format_leaderboard_line(position, player, view):
    prefix = f"{position_prefix(position)} ({player.region or '??'}) **{player.username}**"
    if view == OVERALL:
        title = classify(player.overall)["title"]
        return f"{prefix} - {player.overall} pts · {title}"
    return f"{prefix} - {player.tier_for(view)}"

def page_count(total):
    return max(1, math.ceil(total / LEADERBOARD_PAGE_SIZE))

def create_leaderboard_embed(players, view, page=0):
    """Creates one page of an already filtered and sorted leaderboard."""
    embed = discord.Embed(
        title=f"🏆 {view_display_name(view)}",
        color=discord.Color.gold(),
    )
    start = page * LEADERBOARD_PAGE_SIZE
    lines = [
        format_leaderboard_line(position, player, view)
        for position, player in enumerate(
            players[start:start + LEADERBOARD_PAGE_SIZE],
            start + 1,
        )
    ]
    embed.description = "\n".join(lines) or "No ranked players yet."
    embed.set_footer(text=f"Page {page + 1}/{page_count(len(players))}")
    return embed

def create_player_embed(player):
    """Creates a profile embed listing every gamemode the player is ranked in."""
    achievement = classify(player.overall)
    modes = player_gamemodes(player)
    if modes:
        best = max(modes, key=lambda gamemode: tier_rank(player.tier_for(gamemode)))
        color = tier_color(player.tier_for(best))
    else:
        color = region_color(player.region)
    embed = discord.Embed(
        title=f"{player.username} ({player.region or '??'})",
        description=f"**{achievement['title']}** · {player.overall} points",
        color=discord.Color(color),
    )
    embed.set_thumbnail(url=avatar_url(player.uuid))
    for gamemode in modes:
        embed.add_field(
            name=GAMEMODE_INFO[gamemode]["name"],
            value=player.tier_for(gamemode),
            inline=True,
        )
    if not modes:
        embed.add_field(name="Tiers", value="Unranked", inline=False)
    return embed

def create_titles_embed():
    embed = discord.Embed(
        title="How to obtain Achievement Titles",
        color=discord.Color.purple(),
    )
    lines = []
    for i, (threshold, title, _icon) in enumerate(ACHIEVEMENT_TITLES):
        if i == len(ACHIEVEMENT_TITLES) - 1:
            requirement = f"less than {ACHIEVEMENT_TITLES[i - 1][0]}"
        else:
            requirement = f"{threshold}+"
        lines.append(f"**{title}** - Obtained {requirement} total points.")
    embed.description = "\n".join(lines)
    return embed

def create_points_embed():
    embed = discord.Embed(
        title="How ranking points are calculated",
        color=discord.Color.purple(),
    )
    for label, high_points, low_points in tier_points_table():
        embed.add_field(
            name=label,
            value=f"High: {high_points} Points\nLow: {low_points} Points",
            inline=True,
        )
    embed.set_footer(text="Overall points are the sum across every gamemode.")
    return embed

def create_gamemodes_embed():
    views = [OVERALL, *Gamemode]
    lines = [
        f"`{getattr(view, 'value', view)}` - {view_display_name(view)}"
        for view in views
    ]
    return discord.Embed(
        title="Leaderboards",
        description="\n".join(lines),
        color=discord.Color.gold(),
    )


class LeaderboardView(discord.ui.View):
    """A paged leaderboard with previous and next buttons."""
    def __init__(self, players, view, timeout=600):
        super().__init__(timeout=timeout)
        self.players = players
        self.view_name = view
        self.page = 0
        self.pages = page_count(len(players))
        self.message = None
        self.update_buttons()

    def current_embed(self):
        return create_leaderboard_embed(self.players, self.view_name, self.page)

    def update_buttons(self):
        self.previous_page.disabled = self.page == 0
        self.next_page.disabled = self.page >= self.pages - 1

    @discord.ui.button(label="◀ Previous", style=discord.ButtonStyle.secondary)
    async def previous_page(self, interaction, button):
        self.page = max(0, self.page - 1)
        self.update_buttons()
        await interaction.response.edit_message(embed=self.current_embed(), view=self)

    @discord.ui.button(label="Next ▶", style=discord.ButtonStyle.secondary)
    async def next_page(self, interaction, button):
        self.page = min(self.pages - 1, self.page + 1)
        self.update_buttons()
        await interaction.response.edit_message(embed=self.current_embed(), view=self)

    async def on_timeout(self):
        for item in self.children:
            item.disabled = True
        if self.message:
            with contextlib.suppress(
                discord.HTTPException,
                discord.NotFound,
                discord.Forbidden,
                ):
                await self.message.edit(view=self)
        self.stop()


class PlayerProfileView(discord.ui.View):
    """Link buttons shown under a player profile."""
    def __init__(self, player, timeout=None):
        super().__init__(timeout=timeout)
        self.player = player
        self.create_profile_buttons()

    def create_profile_buttons(self):
        try:
            self.add_item(
                discord.ui.Button(
                    label="NameMC",
                    url=namemc_link(self.player.username),
                    style=discord.ButtonStyle.link,
                ),
            )
            self.add_item(
                discord.ui.Button(
                    label="Avatar",
                    url=avatar_url(self.player.uuid),
                    style=discord.ButtonStyle.link,
                ),
            )
        except Exception as e:
            logger.error(f"Failed to add profile buttons: {e}")
