from dataclasses import dataclass, field, replace
from typing import Optional

from utils.constants import Gamemode
from utils.tiers import parse_tier


@dataclass
class Player:
    """A ranked player.

    `tiers` only holds gamemodes the player is ranked in; a missing key means
    unranked. `overall` is a cached sum of tier points and is only ever set
    by the service layer after recomputing it.
    """

    username: str
    uuid: str
    region: str
    tiers: dict = field(default_factory=dict)
    overall: int = 0
    id: Optional[str] = None

    def tier_for(self, gamemode: Gamemode) -> Optional[str]:
        return self.tiers.get(gamemode)

    @classmethod
    def from_document(cls, doc_id, data: dict) -> "Player":
        tiers = {}
        for gamemode in Gamemode:
            tier = data.get(gamemode.value)
            if tier:
                tiers[gamemode] = tier
        return cls(
            username=data.get("username") or "",
            uuid=data.get("uuid") or "",
            region=data.get("region") or "",
            tiers=tiers,
            overall=data.get("overall") or 0,
            id=doc_id,
        )

    def to_document(self) -> dict:
        """Flattens the player into the stored document layout.

        Unranked gamemodes are stored as empty strings.
        """
        document = {
            "username": self.username,
            "uuid": self.uuid,
            "region": self.region,
        }
        for gamemode in Gamemode:
            document[gamemode.value] = self.tiers.get(gamemode) or ""
        document["overall"] = self.overall
        return document

    def merged(self, fields: dict) -> "Player":
        """Returns a copy with a partial update applied.

        Gamemode keys take a tier code, or a falsy value to clear the tier.
        Unrecognized tier codes also clear the tier. `overall` and `uuid` are
        ignored, the uuid is fixed because it is the document id.
        """
        tiers = dict(self.tiers)
        changes = {}
        for key, value in fields.items():
            if key in ("username", "region"):
                changes[key] = value
                continue
            try:
                gamemode = Gamemode(key)
            except ValueError:
                continue
            tier = parse_tier(value) if value else None
            if tier:
                tiers[gamemode] = tier
            else:
                tiers.pop(gamemode, None)
        return replace(self, tiers=tiers, **changes)
