import urllib.parse

from utils.constants import AVATAR_URL, NAMEMC_URL


def avatar_url(uuid, size=128):
    """Forms a head avatar link for a player's UUID."""
    return AVATAR_URL.format(uuid=uuid, size=size)

def namemc_link(username):
    """Forms a NameMC profile link."""
    encoded_username = urllib.parse.quote(username)
    return NAMEMC_URL.format(username=encoded_username)
