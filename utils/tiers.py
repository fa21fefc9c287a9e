from utils.constants import NEUTRAL_COLOR, TIER_COLORS, TIER_POINTS, TIER_RANK, TIERS


def tier_rank(tier) -> int:
    """Returns 1 (LT5) through 10 (HT1), or 0 for an unset/unknown tier."""
    if not isinstance(tier, str):
        return 0
    return TIER_RANK.get(tier, 0)


def tier_points(tier) -> int:
    """Returns the overall points a tier is worth, 0 for an unset/unknown tier."""
    if not isinstance(tier, str):
        return 0
    return TIER_POINTS.get(tier, 0)


def parse_tier(raw):
    """Parses user input into a canonical tier code.

    Returns None if the input is not one of the ten tier codes.
    """
    if not raw or "\n" in raw:
        return None
    clean_tier = raw.strip().upper()
    if clean_tier not in TIER_RANK:
        return None
    return clean_tier


def tier_color(tier) -> int:
    return TIER_COLORS.get(tier, NEUTRAL_COLOR)


def tier_points_table():
    """Rows of (label, high tier points, low tier points) from tier 1 to 5."""
    rows = []
    for i in range(0, len(TIERS), 2):
        high, low = TIERS[i], TIERS[i + 1]
        rows.append((f"Tier {high[-1]}", TIER_POINTS[high], TIER_POINTS[low]))
    return rows
