# This file is for miscellaneous input parsing.
# If you notice a group of these functions having similar functionality,
# make a separate file for them.
import re

from utils.constants import REGIONS, Gamemode
from utils.tiers import parse_tier

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,16}$")


def parse_username(unclean_username):
    """Parses a Minecraft username, returns None if it can't be valid."""
    if not unclean_username or "\n" in unclean_username:
        return None
    clean_username = unclean_username.strip()
    if not USERNAME_PATTERN.match(clean_username):
        return None
    return clean_username


def parse_region(unclean_region):
    """Parses an unclean_region string.

    Returns clean_region.upper() since regions are stored uppercase.
    """
    if not unclean_region:
        return None
    if "\n" in unclean_region:
        return None
    clean_region = unclean_region.strip()
    return clean_region.upper()

def valid_region(region) -> bool:
    return region in REGIONS

def parse_gamemode(unclean_gamemode):
    if not unclean_gamemode or "\n" in unclean_gamemode:
        return None
    try:
        return Gamemode(unclean_gamemode.strip().lower())
    except ValueError:
        return None

def parse_tier_assignments(args):
    """Parses `mode=tier` arguments into a {Gamemode: tier} dict.

    Returns None if any argument is malformed, names an unknown gamemode or
    an unknown tier, or repeats a gamemode.
    """
    assignments = {}
    for arg in args:
        if arg.count("=") != 1:
            return None
        raw_mode, raw_tier = arg.split("=")
        gamemode = parse_gamemode(raw_mode)
        tier = parse_tier(raw_tier)
        if gamemode is None or tier is None or gamemode in assignments:
            return None
        assignments[gamemode] = tier
    return assignments

def normalize_uuid(uuid):
    """Mojang returns undashed UUIDs; lowercase and strip dashes to compare."""
    return uuid.replace("-", "").lower()
