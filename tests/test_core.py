import pytest

from yewoh.core import Direction, EntityId, EntityKind, Notoriety


def test_zero_entity_is_invalid():
    assert not EntityId.ZERO.is_valid()
    assert EntityId(0) == EntityId.ZERO


def test_entity_id_round_trips_value():
    entity = EntityId(0x40000123)
    assert entity.as_u32() == 0x40000123
    assert entity.is_valid()


def test_entity_id_ordering():
    assert sorted([EntityId(5), EntityId(1), EntityId(3)]) == [
        EntityId(1),
        EntityId(3),
        EntityId(5),
    ]


@pytest.mark.parametrize("value", [-1, 0x100000000])
def test_entity_id_out_of_range(value):
    with pytest.raises(ValueError):
        EntityId(value)


@pytest.mark.parametrize(
    "direction, expected",
    [
        (Direction.NORTH, (0, -1)),
        (Direction.RIGHT, (1, -1)),
        (Direction.EAST, (1, 0)),
        (Direction.DOWN, (1, 1)),
        (Direction.SOUTH, (0, 1)),
        (Direction.LEFT, (-1, 1)),
        (Direction.WEST, (-1, 0)),
        (Direction.UP, (-1, -1)),
    ],
)
def test_direction_vectors(direction, expected):
    assert direction.as_vec2() == expected


@pytest.mark.parametrize("direction", list(Direction))
def test_opposite_directions_cancel(direction):
    opposite = Direction((direction + 4) % 8)
    x, y = direction.as_vec2()
    ox, oy = opposite.as_vec2()
    assert (x + ox, y + oy) == (0, 0)


def test_direction_from_wire_value():
    assert Direction(3) is Direction.DOWN
    with pytest.raises(ValueError):
        Direction(8)


def test_notoriety_has_no_zero():
    assert Notoriety(1) is Notoriety.INNOCENT
    with pytest.raises(ValueError):
        Notoriety(0)


def test_entity_kind_from_wire_value():
    assert EntityKind(2) is EntityKind.MULTI
    with pytest.raises(ValueError):
        EntityKind(3)