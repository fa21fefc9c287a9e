from google.api_core.exceptions import AlreadyExists
from google.cloud.firestore import transactional

from database import LEGACY_PLAYERS_COLLECTION, PLAYERS_COLLECTION
from utils.constants import Gamemode
from utils.exceptions import DatabaseError, DuplicatePlayerError
from utils.helpers import normalize_uuid
from utils.logger_config import logger
from utils.models import Player
from utils.scoring import compute_overall


def merge_and_write(transaction, doc_ref, fields):
    """Reads a player, applies a partial update and rewrites it with a fresh
    overall score. Returns the updated player, or None if it doesn't exist.

    Must run inside a transaction so concurrent edits can't drop each other.
    """
    snapshot = doc_ref.get(transaction=transaction)
    if not snapshot.exists:
        return None
    player = Player.from_document(snapshot.id, snapshot.to_dict()).merged(fields)
    player.overall = compute_overall(player)
    transaction.set(doc_ref, player.to_document())
    return player


class PlayerService:
    """Service layer for tier list Firestore operations."""

    def __init__(self, db):
        self.db = db

    def _players(self):
        return self.db.collection(PLAYERS_COLLECTION)

    # Reads

    async def get_all_players(self):
        try:
            docs = self._players().stream()
            return [Player.from_document(doc.id, doc.to_dict()) for doc in docs]
        except Exception as e:
            logger.exception(f"❌ ERROR: failed to fetch players: {e}")
            raise DatabaseError("Could not load the tier list.") from e

    async def get_player(self, player_id):
        try:
            doc = self._players().document(player_id).get()
        except Exception as e:
            logger.exception(f"❌ ERROR: failed to fetch player {player_id}: {e}")
            raise DatabaseError(f"Could not load player {player_id}.") from e
        if not doc.exists:
            return None
        return Player.from_document(doc.id, doc.to_dict())

    async def find_player(self, identifier):
        """Finds a player by username (case-insensitive), falling back to UUID."""
        players = await self.get_all_players()
        lowered = identifier.strip().lower()
        for player in players:
            if player.username.lower() == lowered:
                return player
        wanted_uuid = normalize_uuid(lowered)
        for player in players:
            if normalize_uuid(player.uuid) == wanted_uuid:
                return player
        return None

    # Writes

    async def create_player(self, player):
        """Stores a new player under its UUID and returns the document id."""
        player.overall = compute_overall(player)
        doc_id = normalize_uuid(player.uuid or "")
        if not doc_id:
            raise DatabaseError(f"Player {player.username} has no UUID.")
        try:
            doc_ref = self._players().document(doc_id)
            doc_ref.create(player.to_document())
        except AlreadyExists as e:
            raise DuplicatePlayerError(
                f"{player.username} is already on the tier list.",
            ) from e
        except Exception as e:
            logger.exception(f"❌ ERROR: adding player: {e}")
            raise DatabaseError(
                f"Database write failed for player {player.username}.",
            ) from e
        player.id = doc_id
        logger.info(f"➕ Added {player.username} ({player.overall} points)")
        return doc_id

    async def update_player(self, player_id, fields):
        """Applies a partial update. Returns False if the player doesn't exist."""
        doc_ref = self._players().document(player_id)
        try:
            transaction = self.db.transaction()
            player = transactional(merge_and_write)(transaction, doc_ref, fields)
        except Exception as e:
            logger.exception(f"❌ ERROR: updating player {player_id}: {e}")
            raise DatabaseError(f"Database write failed for player {player_id}.") from e
        if player is None:
            return False
        logger.info(f"✏️ Updated {player.username} ({player.overall} points)")
        return True

    async def delete_player(self, player_id):
        doc_ref = self._players().document(player_id)
        try:
            doc = doc_ref.get()
            if not doc.exists:
                return False
            doc_ref.delete()
        except Exception as e:
            logger.exception(f"❌ ERROR: deleting player {player_id}: {e}")
            raise DatabaseError(f"Database delete failed for player {player_id}.") from e
        logger.info(f"🗑️ Removed player {player_id}")
        return True

    # Migration

    async def migrate_legacy_players(self):
        """Copies legacy single-tier players into the current collection.

        The old tier becomes the sword tier. Players already present by UUID
        or username are skipped, so running this twice is harmless.
        """
        try:
            old_docs = list(self.db.collection(LEGACY_PLAYERS_COLLECTION).stream())
        except Exception as e:
            logger.exception(f"❌ ERROR: reading legacy players: {e}")
            raise DatabaseError("Could not read the legacy tier list.") from e
        existing = await self.get_all_players()
        existing_uuids = {normalize_uuid(p.uuid) for p in existing}
        existing_usernames = {p.username.lower() for p in existing}
        added_players = []
        skipped_players = []
        errors = []
        for doc in old_docs:
            data = doc.to_dict() or {}
            username = data.get("username") or ""
            uuid = data.get("uuid") or ""
            try:
                if not uuid:
                    skipped_players.append(
                        {"username": username, "reason": "Missing UUID"},
                    )
                    continue
                if (
                    normalize_uuid(uuid) in existing_uuids
                    or username.lower() in existing_usernames
                ):
                    skipped_players.append(
                        {"username": username, "reason": "Already migrated"},
                    )
                    continue
                player = Player(
                    username=username,
                    uuid=uuid,
                    region=data.get("region") or "",
                )
                player = player.merged({Gamemode.SWORD.value: data.get("tier") or ""})
                new_id = await self.create_player(player)
            except DatabaseError as e:
                errors.append({"username": username, "error": e.message})
                continue
            except Exception as e:
                # One bad legacy document must not abort the rest
                logger.exception(f"❌ ERROR: migrating {doc.id}: {e}")
                errors.append({"username": username, "error": str(e)})
                continue
            existing_uuids.add(normalize_uuid(uuid))
            existing_usernames.add(username.lower())
            added_players.append(
                {"old_id": doc.id, "new_id": new_id, "username": username},
            )
        logger.info(
            f"📦 Migration complete: {len(added_players)} added, "
            f"{len(skipped_players)} skipped, {len(errors)} failed",
        )
        return {
            "total": len(old_docs),
            "added": len(added_players),
            "skipped": len(skipped_players),
            "failed": len(errors),
            "added_players": added_players,
            "skipped_players": skipped_players,
            "errors": errors,
        }
