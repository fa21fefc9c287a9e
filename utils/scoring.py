from utils.constants import Gamemode
from utils.tiers import tier_points


def compute_overall(player) -> int:
    """Sums the tier points of every gamemode. Unranked gamemodes add 0."""
    return sum(tier_points(player.tier_for(gamemode)) for gamemode in Gamemode)
