import asyncio
import urllib.parse

import aiohttp

from utils.constants import MOJANG_PROFILE_URL
from utils.exceptions import (
    MojangAPIError,
    RateLimitError,
    ServiceUnavailableError,
    UserNotFoundError,
)
from utils.logger_config import logger

HEADERS = {
    "Accept": "application/json",
    "User-Agent": "TierboardBot/1.0",
}

# Core API Function


async def call_mojang_api(session, url, headers=HEADERS, retries=3):
    for _attempt in range(retries):
        try:
            async with session.get(url, headers=headers) as response:
                if response.status == 200:
                    return await response.json()
                elif response.status == 429:
                    retry_after = int(response.headers.get("Retry-After", 1))
                    logger.warning(
                        f"⚠️ Rate Limit Hit! Sleeping for {retry_after} seconds...",
                    )
                    await asyncio.sleep(retry_after)
                    continue
                # other statuses - dont retry
                elif response.status in (204, 404):
                    # Mojang answers unknown usernames with either
                    return None
                elif response.status in (502, 503, 504):
                    raise ServiceUnavailableError()
                else:
                    raise MojangAPIError(f"Mojang API Error {response.status}: {url}")
        except aiohttp.ClientError as e:
            raise MojangAPIError("Network Connection Failed") from e
    raise RateLimitError(f"Max retries exceeded for Mojang API: {url}")


# Specific Data Fetchers


async def get_uuid(session, username):
    """Resolves a Minecraft username to its UUID and correctly cased name."""
    api_url = MOJANG_PROFILE_URL.format(username=urllib.parse.quote(username))
    data = await call_mojang_api(session, api_url)
    if not data:
        raise UserNotFoundError(f"Minecraft user {username} not found.")
    return {"uuid": data.get("id"), "username": data.get("name")}
