from roomcrawl.dungeon.graph import build_room_graph, grid_extent
from roomcrawl.dungeon.ids import IdFactory
from roomcrawl.models import Direction, RoomType
from roomcrawl.rng import RandomSource

from helpers import SEEDS, reachable_from


def test_graph_has_exact_room_count():
    for seed in SEEDS:
        rooms = build_room_graph(12, RandomSource(seed=seed))
        assert len(rooms) == 12


def test_first_room_is_start_at_origin():
    rooms = build_room_graph(6, RandomSource(seed=3))
    first = next(iter(rooms.values()))
    assert first.type is RoomType.START
    assert first.position == (0, 0)
    assert all(r.type is RoomType.EMPTY for r in list(rooms.values())[1:])


def test_graph_is_connected_from_start():
    for seed in SEEDS:
        rooms = build_room_graph(15, RandomSource(seed=seed))
        start_id = next(iter(rooms))
        assert reachable_from(rooms, start_id) == set(rooms)


def test_links_are_symmetric_and_adjacent():
    for seed in SEEDS:
        rooms = build_room_graph(15, RandomSource(seed=seed))
        for room in rooms.values():
            for direction, target in room.links.items():
                if target is None:
                    continue
                other = rooms[target]
                assert other.links[direction.opposite] == room.id
                dx, dy = direction.offset
                assert (room.grid_x + dx, room.grid_y + dy) == other.position


def test_no_two_rooms_share_a_cell():
    for seed in SEEDS:
        rooms = build_room_graph(20, RandomSource(seed=seed))
        cells = [r.position for r in rooms.values()]
        assert len(cells) == len(set(cells))


def test_room_count_below_one_is_clamped():
    rooms = build_room_graph(0, RandomSource(seed=1))
    assert len(rooms) == 1


def test_ids_are_sequential_per_factory():
    ids = IdFactory()
    rooms = build_room_graph(4, RandomSource(seed=8), ids)
    assert list(rooms) == ["room_1", "room_2", "room_3", "room_4"]
    assert ids.content_id() == "content_5"


def test_grid_extent_includes_origin():
    rooms = build_room_graph(1, RandomSource(seed=1))
    assert grid_extent(rooms) == (1, 1)
    for seed in SEEDS:
        rooms = build_room_graph(10, RandomSource(seed=seed))
        xs = [r.grid_x for r in rooms.values()]
        ys = [r.grid_y for r in rooms.values()]
        assert grid_extent(rooms) == (max(xs) - min(xs) + 1, max(ys) - min(ys) + 1)


def test_direction_helpers():
    assert Direction.NORTH.opposite is Direction.SOUTH
    assert Direction.EAST.opposite is Direction.WEST
    assert Direction.NORTH.offset == (0, -1)
    assert Direction.WEST.offset == (-1, 0)
