from enum import Enum


class Gamemode(str, Enum):
    SWORD = "sword"
    VANILLA = "vanilla"
    UHC = "uhc"
    POT = "pot"
    NETHOP = "nethop"
    SMP = "smp"
    AXE = "axe"
    MACE = "mace"


# Synthetic view, never stored as a tier assignment
OVERALL = "overall"

GAMEMODE_INFO = {
    OVERALL: {"name": "Overall", "display_name": "Overall Rankings", "icon": "/overall.svg"},
    Gamemode.SWORD: {"name": "Sword", "display_name": "Sword PVP", "icon": "/sword.svg"},
    Gamemode.VANILLA: {"name": "Vanilla", "display_name": "Vanilla PVP", "icon": "/vanilla.svg"},
    Gamemode.UHC: {"name": "UHC", "display_name": "UHC", "icon": "/uhc.svg"},
    Gamemode.POT: {"name": "Pot", "display_name": "Pot PVP", "icon": "/pot.svg"},
    Gamemode.NETHOP: {"name": "NethOP", "display_name": "NethOP", "icon": "/nethop.svg"},
    Gamemode.SMP: {"name": "SMP", "display_name": "SMP PVP", "icon": "/smp.svg"},
    Gamemode.AXE: {"name": "Axe", "display_name": "Axe PVP", "icon": "/axe.svg"},
    Gamemode.MACE: {"name": "Mace", "display_name": "Mace PVP", "icon": "/mace.svg"},
}

# Best to worst
TIERS = ["HT1", "LT1", "HT2", "LT2", "HT3", "LT3", "HT4", "LT4", "HT5", "LT5"]

TIER_RANK = {
    "HT1": 10,
    "LT1": 9,
    "HT2": 8,
    "LT2": 7,
    "HT3": 6,
    "LT3": 5,
    "HT4": 4,
    "LT4": 3,
    "HT5": 2,
    "LT5": 1,
}
TIER_POINTS = {
    "HT1": 60,
    "LT1": 45,
    "HT2": 30,
    "LT2": 20,
    "HT3": 10,
    "LT3": 6,
    "HT4": 4,
    "LT4": 3,
    "HT5": 2,
    "LT5": 1,
}
TIER_COLORS = {
    "HT1": 0xFFBB00,
    "LT1": 0xFFEA30,
    "HT2": 0x000000,
    "LT2": 0x6D6D6D,
    "HT3": 0xFF8B00,
    "LT3": 0x773B00,
    "HT4": 0x009DFF,
    "LT4": 0x32D3FF,
    "HT5": 0x56DCFD,
    "LT5": 0x81E0FF,
}

REGIONS = ("NA", "EU", "AS", "OCE")
REGION_COLORS = {
    "NA": 0xDC2626,
    "EU": 0x16A34A,
    "AS": 0x2563EB,
    "OCE": 0x2563EB,
}
NEUTRAL_COLOR = 0x4B5563

# (inclusive lower bound, title, icon), highest threshold first
ACHIEVEMENT_TITLES = [
    (400, "Combat Grandmaster", "/combat_grandmaster.webp"),
    (250, "Combat Master", "/combat_master.webp"),
    (100, "Combat Ace", "/combat_ace.svg"),
    (50, "Combat Specialist", "/combat_specialist.svg"),
    (20, "Combat Cadet", "/combat_cadet.svg"),
    (10, "Combat Novice", "/combat_novice.svg"),
    (0, "Rookie", "/rookie.svg"),
]

MOJANG_PROFILE_URL = "https://api.mojang.com/users/profiles/minecraft/{username}"
AVATAR_URL = "https://mc-heads.net/avatar/{uuid}/{size}"
NAMEMC_URL = "https://namemc.com/profile/{username}"

LEADERBOARD_PAGE_SIZE = 10
