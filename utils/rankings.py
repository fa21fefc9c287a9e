from utils.constants import OVERALL, Gamemode
from utils.tiers import tier_rank


def _as_gamemode(view):
    if isinstance(view, Gamemode):
        return view
    try:
        return Gamemode(view)
    except ValueError:
        return None


def parse_view(raw):
    """Parses a leaderboard view name. Returns "overall", a Gamemode or None."""
    if not raw or "\n" in raw:
        return None
    clean_view = raw.strip().lower()
    if clean_view == OVERALL:
        return OVERALL
    return _as_gamemode(clean_view)


def has_rank(player, view) -> bool:
    if view == OVERALL:
        return player.overall > 0
    gamemode = _as_gamemode(view)
    if gamemode is None:
        return False
    return bool(player.tier_for(gamemode))


def player_gamemodes(player):
    """Returns every gamemode the player holds a tier in."""
    return [gamemode for gamemode in Gamemode if has_rank(player, gamemode)]


def filter_for_view(players, view):
    """Keeps the players that belong on a view's leaderboard.

    The overall view keeps anyone with points, a gamemode view keeps anyone
    with a tier in that gamemode. Unknown views keep nobody.
    """
    return [player for player in players if has_rank(player, view)]


def sort_for_view(players, view):
    """Orders players best first for a view.

    Overall sorts by points, a gamemode by tier rank. Ties fall back to
    username in plain code point order (so "Zed" sorts before "abe"), then
    uuid, so no two players ever tie.
    """
    if view == OVERALL:
        def score(player):
            return player.overall
    else:
        gamemode = _as_gamemode(view)

        def score(player):
            if gamemode is None:
                return 0
            return tier_rank(player.tier_for(gamemode))

    return sorted(
        players,
        key=lambda player: (-score(player), player.username, player.uuid),
    )
