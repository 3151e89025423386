import pytest

from roomcrawl.errors import (
    ContentAlreadyTriggeredError,
    ExitLockedError,
    PuzzleUnsolvedError,
    SecretNotDiscoveredError,
    TriggerError,
)
from roomcrawl.interaction import triggers
from roomcrawl.models import (
    ChestPayload,
    ContentItem,
    EnemyPayload,
    ExitPayload,
    PuzzlePayload,
    Room,
    RoomType,
    SecretPayload,
)


def _item(item_id, payload):
    return ContentItem(id=item_id, x=0.5, y=0.5, payload=payload)


@pytest.fixture
def boss_room():
    room = Room(id="room_9", type=RoomType.BOSS, grid_x=2, grid_y=0)
    room.contents = [
        _item("boss", EnemyPayload(enemy_id="boss", level=3, is_boss=True)),
        _item("exit", ExitPayload(requires_boss_defeated=True)),
    ]
    return room


@pytest.fixture
def secret_room():
    room = Room(id="room_4", type=RoomType.SECRET, grid_x=0, grid_y=1)
    room.contents = [
        _item("spring", SecretPayload("healing_spring", "Healing Spring", "full_heal", 0, 0, heal_amount=999)),
    ]
    return room


def test_secret_must_be_discovered_first(secret_room):
    (secret,) = secret_room.contents
    assert not triggers.can_trigger(secret, secret_room)
    with pytest.raises(SecretNotDiscoveredError):
        triggers.trigger(secret, secret_room)
    assert not secret.triggered

    assert triggers.discover_secret(secret) is True
    assert triggers.discover_secret(secret) is False
    assert triggers.can_trigger(secret, secret_room)
    triggers.trigger(secret, secret_room)
    assert secret.triggered


def test_discover_rejects_non_secrets():
    chest = _item("c", ChestPayload("gold_small", 10))
    with pytest.raises(TypeError):
        triggers.discover_secret(chest)


def test_exit_stays_locked_until_boss_defeated(boss_room):
    boss, exit_item = boss_room.contents
    assert not triggers.is_exit_unlocked(exit_item)
    with pytest.raises(ExitLockedError, match="Defeat the boss first!"):
        triggers.trigger(exit_item, boss_room)
    assert not exit_item.triggered
    assert exit_item.payload.boss_defeated is False

    triggers.trigger(boss, boss_room)
    assert triggers.is_boss_defeated(boss_room)
    assert exit_item.payload.boss_defeated is True
    assert boss_room.cleared

    triggers.trigger(exit_item, boss_room)
    assert exit_item.triggered


def test_exit_without_gate_triggers_immediately():
    room = Room(id="room_5", type=RoomType.EXIT, grid_x=1, grid_y=0)
    room.contents = [_item("exit", ExitPayload())]
    assert triggers.can_trigger(room.contents[0], room)
    triggers.trigger(room.contents[0], room)
    assert room.contents[0].triggered


def test_trigger_twice_raises(boss_room):
    boss = boss_room.contents[0]
    triggers.trigger(boss, boss_room)
    assert not triggers.can_trigger(boss, boss_room)
    with pytest.raises(ContentAlreadyTriggeredError):
        triggers.trigger(boss, boss_room)


def test_room_cleared_after_last_enemy():
    room = Room(id="room_2", type=RoomType.ENEMY, grid_x=0, grid_y=-1)
    room.contents = [
        _item("e1", EnemyPayload("rat", 1)),
        _item("e2", EnemyPayload("rat", 1)),
        _item("c1", ChestPayload("gold_small", 12, bonus=True)),
    ]
    triggers.trigger(room.contents[0], room)
    assert not room.cleared
    assert not triggers.is_room_cleared(room)
    triggers.trigger(room.contents[1], room)
    assert room.cleared
    # untouched chests do not hold the room back
    assert not room.contents[2].triggered


def test_sync_boss_gate_reports_flip(boss_room):
    boss, exit_item = boss_room.contents
    assert triggers.sync_boss_gate(boss_room) is False
    boss.triggered = True
    assert triggers.sync_boss_gate(boss_room) is True
    assert triggers.sync_boss_gate(boss_room) is False
    assert triggers.is_exit_unlocked(exit_item)


def test_puzzle_cannot_be_triggered_directly():
    room = Room(id="room_6", type=RoomType.PUZZLE, grid_x=1, grid_y=1)
    room.contents = [_item("stone", PuzzlePayload("switch", "Ancient Switch", "chest", 40, 20))]
    (puzzle,) = room.contents
    assert not triggers.can_trigger(puzzle, room)
    with pytest.raises(PuzzleUnsolvedError, match="open_puzzle"):
        triggers.trigger(puzzle, room)
    assert not puzzle.triggered
    assert not puzzle.payload.solved
    assert issubclass(PuzzleUnsolvedError, TriggerError)
