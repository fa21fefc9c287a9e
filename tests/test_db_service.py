from unittest.mock import MagicMock, patch

import pytest
from google.api_core.exceptions import AlreadyExists

from database import LEGACY_PLAYERS_COLLECTION, PLAYERS_COLLECTION
from utils.constants import Gamemode
from utils.db_service import PlayerService, merge_and_write
from utils.exceptions import DatabaseError, DuplicatePlayerError
from utils.models import Player


def make_snapshot(doc_id, data, exists=True):
    snapshot = MagicMock()
    snapshot.id = doc_id
    snapshot.exists = exists
    snapshot.to_dict.return_value = data
    return snapshot


def player_document(username, uuid, overall=0, **tiers):
    document = {"username": username, "uuid": uuid, "region": "NA"}
    for gamemode in Gamemode:
        document[gamemode.value] = tiers.get(gamemode.value, "")
    document["overall"] = overall
    return document


@pytest.fixture
def collections():
    return {
        PLAYERS_COLLECTION: MagicMock(),
        LEGACY_PLAYERS_COLLECTION: MagicMock(),
    }


@pytest.fixture
def mock_db(collections):
    db = MagicMock()
    db.collection.side_effect = lambda name: collections[name]
    return db


@pytest.fixture
def service(mock_db):
    return PlayerService(mock_db)


def test_merge_and_write_recomputes_overall():
    transaction = MagicMock()
    doc_ref = MagicMock()
    doc_ref.get.return_value = make_snapshot(
        "abc",
        player_document("Steve", "abc", overall=60, sword="HT1"),
    )
    player = merge_and_write(transaction, doc_ref, {"axe": "LT1", "overall": 1})
    assert player.overall == 105
    doc_ref.get.assert_called_once_with(transaction=transaction)
    written = transaction.set.call_args.args[1]
    assert written["sword"] == "HT1"
    assert written["axe"] == "LT1"
    assert written["overall"] == 105

def test_merge_and_write_clearing_tier_lowers_overall():
    transaction = MagicMock()
    doc_ref = MagicMock()
    doc_ref.get.return_value = make_snapshot(
        "abc",
        player_document("Steve", "abc", overall=105, sword="HT1", axe="LT1"),
    )
    player = merge_and_write(transaction, doc_ref, {"sword": ""})
    assert player.overall == 45
    assert transaction.set.call_args.args[1]["sword"] == ""

def test_merge_and_write_missing_player():
    transaction = MagicMock()
    doc_ref = MagicMock()
    doc_ref.get.return_value = make_snapshot("abc", None, exists=False)
    assert merge_and_write(transaction, doc_ref, {"sword": "HT1"}) is None
    transaction.set.assert_not_called()


@pytest.mark.asyncio
async def test_get_all_players(service, collections):
    collections[PLAYERS_COLLECTION].stream.return_value = [
        make_snapshot("a", player_document("Steve", "a", overall=60, sword="HT1")),
        make_snapshot("b", player_document("Alex", "b")),
    ]
    players = await service.get_all_players()
    assert [p.username for p in players] == ["Steve", "Alex"]
    assert players[0].tier_for(Gamemode.SWORD) == "HT1"
    assert players[0].id == "a"

@pytest.mark.asyncio
async def test_get_all_players_failure(service, collections):
    collections[PLAYERS_COLLECTION].stream.side_effect = RuntimeError("boom")
    with pytest.raises(DatabaseError):
        await service.get_all_players()

@pytest.mark.asyncio
async def test_get_player_missing(service, collections):
    doc_ref = collections[PLAYERS_COLLECTION].document.return_value
    doc_ref.get.return_value = make_snapshot("zzz", None, exists=False)
    assert await service.get_player("zzz") is None

@pytest.mark.asyncio
async def test_find_player_by_username_then_uuid(service, collections):
    collections[PLAYERS_COLLECTION].stream.return_value = [
        make_snapshot("a", player_document("Steve", "069a79f444e94726a5befca90e38aaf5")),
    ]
    assert (await service.find_player("sTEVE")).id == "a"
    found = await service.find_player("069A79F4-44E9-4726-A5BE-FCA90E38AAF5")
    assert found.id == "a"
    assert await service.find_player("Alex") is None

@pytest.mark.asyncio
async def test_create_player_computes_overall(service, collections):
    player = Player(
        username="Steve",
        uuid="069A79F4-44E9-4726-A5BE-FCA90E38AAF5",
        region="NA",
        tiers={Gamemode.SWORD: "HT1", Gamemode.POT: "LT3"},
        overall=9999,
    )
    doc_id = await service.create_player(player)
    assert doc_id == "069a79f444e94726a5befca90e38aaf5"
    collections[PLAYERS_COLLECTION].document.assert_called_once_with(doc_id)
    doc_ref = collections[PLAYERS_COLLECTION].document.return_value
    written = doc_ref.create.call_args.args[0]
    assert written["overall"] == 66
    assert written["pot"] == "LT3"
    assert written["mace"] == ""
    assert player.id == doc_id

@pytest.mark.asyncio
async def test_create_player_duplicate(service, collections):
    doc_ref = collections[PLAYERS_COLLECTION].document.return_value
    doc_ref.create.side_effect = AlreadyExists("exists")
    player = Player(username="Steve", uuid="abc", region="NA", tiers={Gamemode.SWORD: "HT1"})
    with pytest.raises(DuplicatePlayerError):
        await service.create_player(player)

@pytest.mark.asyncio
async def test_create_player_write_failure(service, collections):
    doc_ref = collections[PLAYERS_COLLECTION].document.return_value
    doc_ref.create.side_effect = RuntimeError("boom")
    player = Player(username="Steve", uuid="abc", region="NA", tiers={Gamemode.SWORD: "HT1"})
    with pytest.raises(DatabaseError):
        await service.create_player(player)

@pytest.mark.asyncio
async def test_update_player_runs_in_transaction(service, mock_db, collections):
    doc_ref = collections[PLAYERS_COLLECTION].document.return_value
    doc_ref.get.return_value = make_snapshot(
        "abc",
        player_document("Steve", "abc", overall=60, sword="HT1"),
    )
    transaction = mock_db.transaction.return_value
    with patch("utils.db_service.transactional", side_effect=lambda fn: fn) as wrap:
        assert await service.update_player("abc", {"vanilla": "HT2"}) is True
    wrap.assert_called_once_with(merge_and_write)
    written = transaction.set.call_args.args[1]
    assert written["overall"] == 90

@pytest.mark.asyncio
async def test_update_player_missing(service, collections):
    doc_ref = collections[PLAYERS_COLLECTION].document.return_value
    doc_ref.get.return_value = make_snapshot("abc", None, exists=False)
    with patch("utils.db_service.transactional", side_effect=lambda fn: fn):
        assert await service.update_player("abc", {"vanilla": "HT2"}) is False

@pytest.mark.asyncio
async def test_update_player_failure(service, collections):
    doc_ref = collections[PLAYERS_COLLECTION].document.return_value
    doc_ref.get.side_effect = RuntimeError("boom")
    with (
        patch("utils.db_service.transactional", side_effect=lambda fn: fn),
        pytest.raises(DatabaseError),
    ):
        await service.update_player("abc", {"vanilla": "HT2"})

@pytest.mark.asyncio
async def test_delete_player(service, collections):
    doc_ref = collections[PLAYERS_COLLECTION].document.return_value
    doc_ref.get.return_value = make_snapshot("abc", {})
    assert await service.delete_player("abc") is True
    doc_ref.delete.assert_called_once()

@pytest.mark.asyncio
async def test_delete_player_missing(service, collections):
    doc_ref = collections[PLAYERS_COLLECTION].document.return_value
    doc_ref.get.return_value = make_snapshot("abc", None, exists=False)
    assert await service.delete_player("abc") is False
    doc_ref.delete.assert_not_called()

@pytest.mark.asyncio
async def test_migrate_legacy_players(service, collections):
    collections[LEGACY_PLAYERS_COLLECTION].stream.return_value = [
        make_snapshot("old1", {"username": "Steve", "uuid": "uuid-steve", "tier": "HT1", "region": "NA"}),
        make_snapshot("old2", {"username": "ALEX", "uuid": "uuid-alex-old", "tier": "LT2", "region": "EU"}),
        make_snapshot("old3", {"username": "Herobrine", "uuid": "uuid-hero", "tier": "", "region": "EU"}),
    ]
    collections[PLAYERS_COLLECTION].stream.return_value = [
        make_snapshot("uuid-alex", player_document("Alex", "uuid-alex", overall=30, sword="HT2")),
    ]
    doc_ref = collections[PLAYERS_COLLECTION].document.return_value
    summary = await service.migrate_legacy_players()
    assert summary["total"] == 3
    assert summary["added"] == 2
    assert summary["skipped"] == 1
    assert summary["failed"] == 0
    assert summary["skipped_players"][0]["username"] == "ALEX"
    written = [call.args[0] for call in doc_ref.create.call_args_list]
    assert written[0]["sword"] == "HT1"
    assert written[0]["overall"] == 60
    assert written[1]["sword"] == ""
    assert written[1]["overall"] == 0

@pytest.mark.asyncio
async def test_migrate_records_write_errors(service, collections):
    collections[LEGACY_PLAYERS_COLLECTION].stream.return_value = [
        make_snapshot("old1", {"username": "Steve", "uuid": "uuid-steve", "tier": "HT1", "region": "NA"}),
    ]
    collections[PLAYERS_COLLECTION].stream.return_value = []
    doc_ref = collections[PLAYERS_COLLECTION].document.return_value
    doc_ref.create.side_effect = AlreadyExists("exists")
    summary = await service.migrate_legacy_players()
    assert summary["failed"] == 1
    assert summary["errors"][0]["username"] == "Steve"

@pytest.mark.asyncio
async def test_create_player_without_uuid(service, collections):
    player = Player(username="Steve", uuid="", region="NA", tiers={Gamemode.SWORD: "HT1"})
    with pytest.raises(DatabaseError):
        await service.create_player(player)
    collections[PLAYERS_COLLECTION].document.assert_not_called()

@pytest.mark.asyncio
async def test_create_player_bad_document_id(service, collections):
    collections[PLAYERS_COLLECTION].document.side_effect = ValueError("bad path")
    player = Player(username="Steve", uuid="abc", region="NA", tiers={Gamemode.SWORD: "HT1"})
    with pytest.raises(DatabaseError):
        await service.create_player(player)

@pytest.mark.asyncio
async def test_migrate_tolerates_null_fields(service, collections):
    collections[LEGACY_PLAYERS_COLLECTION].stream.return_value = [
        make_snapshot("old1", {"username": None, "uuid": "u1", "tier": "HT1", "region": None}),
        make_snapshot("old2", {"username": "Steve", "uuid": "uuid-steve", "tier": None, "region": "NA"}),
    ]
    collections[PLAYERS_COLLECTION].stream.return_value = []
    doc_ref = collections[PLAYERS_COLLECTION].document.return_value
    summary = await service.migrate_legacy_players()
    assert summary["added"] == 2
    assert summary["failed"] == 0
    written = [call.args[0] for call in doc_ref.create.call_args_list]
    assert written[0]["username"] == ""
    assert written[0]["region"] == ""
    assert written[0]["sword"] == "HT1"
    assert written[1]["sword"] == ""

@pytest.mark.asyncio
async def test_migrate_skips_missing_uuid(service, collections):
    collections[LEGACY_PLAYERS_COLLECTION].stream.return_value = [
        make_snapshot("old1", {"username": "Steve", "tier": "HT1", "region": "NA"}),
        make_snapshot("old2", {"username": "Alex", "uuid": "", "tier": "HT2", "region": "EU"}),
    ]
    collections[PLAYERS_COLLECTION].stream.return_value = []
    summary = await service.migrate_legacy_players()
    assert summary["added"] == 0
    assert summary["skipped"] == 2
    assert {s["reason"] for s in summary["skipped_players"]} == {"Missing UUID"}
    collections[PLAYERS_COLLECTION].document.assert_not_called()

@pytest.mark.asyncio
async def test_migrate_continues_after_malformed_document(service, collections):
    collections[LEGACY_PLAYERS_COLLECTION].stream.return_value = [
        make_snapshot("old1", {"username": "Broken", "uuid": 12345, "tier": "HT1", "region": "NA"}),
        make_snapshot("old2", {"username": "Steve", "uuid": "uuid-steve", "tier": "HT1", "region": "NA"}),
    ]
    collections[PLAYERS_COLLECTION].stream.return_value = []
    summary = await service.migrate_legacy_players()
    assert summary["added"] == 1
    assert summary["failed"] == 1
    assert summary["errors"][0]["username"] == "Broken"
    assert summary["added_players"][0]["username"] == "Steve"
