import pytest

from blockcraft.block import Block, BlockRegistry, BoundingBox, default_registry

UNIT = BoundingBox((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))


@pytest.fixture
def registry():
    reg = BlockRegistry()
    reg.register_block(Block("stone", 1 << 4, True, UNIT))
    reg.register_block(Block("granite", (1 << 4) | 1, True, UNIT))
    reg.register_block(Block("air", 0, False))
    return reg


def test_get_block_exact(registry):
    assert registry.get_block((1 << 4) | 1).name == "granite"


def test_get_block_falls_back_to_base(registry):
    assert registry.get_block((1 << 4) | 7).name == "stone"


def test_get_block_unknown_is_none(registry):
    assert registry.get_block(99 << 4) is None


def test_get_block_by_meta(registry):
    assert registry.get_block_by_meta(1, 1).name == "granite"
    assert registry.get_block_by_meta(1, 1 + 16).name == "granite"


def test_get_block_by_name(registry):
    assert registry.get_block_by_name("air").data == 0
    assert registry.get_block_by_name("missing") is None


def test_clear(registry):
    registry.clear()
    assert len(registry) == 0
    assert registry.get_block_by_name("stone") is None


def test_register_replaces_same_id(registry):
    registry.register_block(Block("smooth", 1 << 4))
    assert registry.get_block(1 << 4).name == "smooth"


def test_default_registry_is_shared():
    marker = Block("shared_registry_marker", 0xFFFF0, False)
    default_registry().register_block(marker)
    found = default_registry().get_block_by_name("shared_registry_marker")
    assert found.data == 0xFFFF0
    assert default_registry().get_block(0xFFFF0).name == "shared_registry_marker"


def test_block_equality_uses_data():
    assert Block("a", 5) == Block("b", 5)
    assert not Block("a", 5) == Block("a", 6)
    assert hash(Block("a", 5)) == hash(Block("c", 5))


def test_is_opaque():
    assert Block("stone", 16, True, UNIT).is_opaque()
    assert not Block("air", 0, False).is_opaque()


def test_intersects():
    other = BoundingBox((0.5, 0.5, 0.5), (1.5, 1.5, 1.5))
    assert UNIT.intersects(other)
    assert other.intersects(UNIT)
    touching = BoundingBox((1.0, 0.0, 0.0), (2.0, 1.0, 1.0))
    assert not UNIT.intersects(touching)


def test_offset_round_trip():
    moved = UNIT.offset((3, -2, 5))
    assert moved.offset((-3, 2, -5)) == UNIT
    assert moved.min == (3.0, -2.0, 5.0)


def test_world_bounding_box_truncates():
    block = Block("stone", 16, True, UNIT)
    assert block.world_bounding_box((2.7, 3.2, 4.9)) == UNIT.offset((2, 3, 4))


def test_collides_with():
    block = Block("stone", 16, True, UNIT)
    hit, box = block.collides_with((4, 0, 0), BoundingBox((4.5, 0.5, 0.5), (5.5, 1.5, 1.5)))
    assert hit
    assert box == UNIT.offset((4, 0, 0))
    miss, _ = block.collides_with((0, 0, 0), BoundingBox((4.5, 0.5, 0.5), (5.5, 1.5, 1.5)))
    assert not miss


def test_bounding_boxes():
    assert Block("stone", 16, True, UNIT).bounding_boxes() == [UNIT]