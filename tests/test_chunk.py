import io
import struct

import pytest

from blockcraft.block import Block, BlockRegistry
from blockcraft.block_entity import BlockEntityType, Chest, Sign
from blockcraft.chunk import Chunk, ChunkColumn, ChunkColumnMetadata

LIGHT = 16 * 16 * 16 // 2


@pytest.fixture
def registry():
    reg = BlockRegistry()
    for name, data in (("air", 0), ("stone", 16), ("grass", 32), ("dirt", 48)):
        reg.register_block(Block(name, data))
    return reg


def _varint(value):
    value &= 0xFFFFFFFF
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _section(bits, palette, longs, light_sections=2):
    out = bytes([bits]) + _varint(len(palette))
    out += b"".join(_varint(p) for p in palette)
    out += _varint(len(longs)) + b"".join(struct.pack(">Q", v) for v in longs)
    return out + bytes(LIGHT * light_sections)


def test_fresh_chunk_reads_air(registry):
    chunk = Chunk(registry)
    assert chunk.get_block((3, 4, 5)).name == "air"
    assert chunk.bits_per_block == 4


def test_first_set_allocates_data_and_palette(registry):
    chunk = Chunk(registry)
    chunk.set_block((0, 0, 0), registry.get_block(16))
    assert len(chunk.data) == 256
    assert chunk.palette == [0, 16]


def test_set_get_round_trip(registry):
    chunk = Chunk(registry)
    placed = {(0, 0, 0): 16, (15, 15, 15): 48, (7, 3, 9): 32, (1, 0, 0): 48}
    for pos, data in placed.items():
        chunk.set_block(pos, registry.get_block(data))
    for pos, data in placed.items():
        assert chunk.get_block(pos).data == data
    assert chunk.get_block((2, 0, 0)).name == "air"


def test_overwrite_keeps_neighbours(registry):
    chunk = Chunk(registry)
    chunk.set_block((4, 4, 4), registry.get_block(16))
    chunk.set_block((5, 4, 4), registry.get_block(32))
    chunk.set_block((4, 4, 4), registry.get_block(48))
    assert chunk.get_block((4, 4, 4)).name == "dirt"
    assert chunk.get_block((5, 4, 4)).name == "grass"


def test_values_straddling_longs_round_trip(registry):
    chunk = Chunk(registry)
    chunk.bits_per_block = 5
    ids = [0, 16, 32, 48]
    positions = [(x, y, z) for y in range(16) for z in range(16) for x in range(16)]
    for n, pos in enumerate(positions):
        chunk.set_block(pos, registry.get_block(ids[n % 4]))
    for n, pos in enumerate(positions):
        assert chunk.get_block(pos).data == ids[n % 4]


def test_direct_mode_round_trip(registry):
    chunk = Chunk(registry)
    chunk.bits_per_block = 14
    chunk.set_block((3, 2, 1), registry.get_block(48))
    chunk.set_block((4, 2, 1), registry.get_block(32))
    assert chunk.get_block((3, 2, 1)).name == "dirt"
    assert chunk.get_block((4, 2, 1)).name == "grass"


def test_out_of_range_get_is_air_and_set_raises(registry):
    chunk = Chunk(registry)
    chunk.set_block((0, 0, 0), registry.get_block(16))
    assert chunk.get_block((16, 0, 0)).name == "air"
    assert chunk.get_block((0, -1, 0)).name == "air"
    with pytest.raises(IndexError):
        chunk.set_block((0, 16, 0), registry.get_block(16))


def test_load_reads_palette_and_data(registry):
    longs = [0] * 256
    longs[0] = 1 | (2 << 4)
    raw = _section(4, [0, 16, 48], longs)
    stream = io.BytesIO(raw)
    chunk = Chunk(registry)
    chunk.load(stream, ChunkColumnMetadata(x=0, z=0, section_mask=1, skylight=True))
    assert stream.tell() == len(raw)
    assert chunk.palette == [0, 16, 48]
    assert chunk.get_block((0, 0, 0)).name == "stone"
    assert chunk.get_block((1, 0, 0)).name == "dirt"
    assert chunk.get_block((2, 0, 0)).name == "air"


def test_load_without_skylight_leaves_rest(registry):
    trailer = b"rest"
    raw = _section(4, [0], [0] * 256, light_sections=1) + trailer
    stream = io.BytesIO(raw)
    Chunk(registry).load(stream, ChunkColumnMetadata(x=0, z=0, section_mask=1, skylight=False))
    assert stream.read() == trailer


def test_load_direct_mode(registry):
    longs = [0] * (4096 * 14 // 64)
    longs[0] = 48
    chunk = Chunk(registry)
    chunk.load(io.BytesIO(_section(14, [], longs)), ChunkColumnMetadata(0, 0, 1))
    assert chunk.get_block((0, 0, 0)).name == "dirt"


def test_load_truncated_raises(registry):
    raw = _section(4, [0, 16], [0] * 256)[:-10]
    with pytest.raises(EOFError):
        Chunk(registry).load(io.BytesIO(raw), ChunkColumnMetadata(0, 0, 1))


def test_column_reads_masked_sections(registry):
    longs = [0] * 256
    longs[0] = 1
    raw = _section(4, [0, 16], longs) + _section(4, [0, 32], longs)
    column = ChunkColumn(ChunkColumnMetadata(x=0, z=0, section_mask=0b101), registry)
    column.read_sections(io.BytesIO(raw))
    assert column[1] is None
    assert column[0].get_block((0, 0, 0)).name == "stone"
    assert column[2].get_block((0, 0, 0)).name == "grass"
    assert column.get_block((0, 32, 0)).name == "grass"
    assert column.get_block((0, 16, 0)).name == "air"


def test_column_get_block_outside_height_is_air(registry):
    column = ChunkColumn(ChunkColumnMetadata(x=0, z=0, section_mask=1), registry)
    section = Chunk(registry)
    section.set_block((0, 15, 0), registry.get_block(16))
    column[0] = section
    assert column.get_block((0, 15, 0)).name == "stone"
    assert column.get_block((0, -1, 0)).name == "air"
    assert column.get_block((0, 300, 0)).name == "air"


def test_column_index_out_of_range(registry):
    column = ChunkColumn(ChunkColumnMetadata(x=0, z=0, section_mask=0), registry)
    with pytest.raises(IndexError):
        column[16]
    with pytest.raises(IndexError):
        column[-1] = Chunk(registry)


def test_column_block_entities(registry):
    column = ChunkColumn(ChunkColumnMetadata(x=0, z=0, section_mask=0), registry)
    chest = Chest(BlockEntityType.CHEST, (1, 2, 3))
    sign = Sign(BlockEntityType.SIGN, (4, 5, 6))
    column.add_block_entity(chest)
    column.add_block_entity(sign)
    assert column.get_block_entity((1, 2, 3)) is chest
    assert {id(e) for e in column.block_entities()} == {id(chest), id(sign)}
    column.remove_block_entity((1, 2, 3))
    column.remove_block_entity((9, 9, 9))
    assert column.get_block_entity((1, 2, 3)) is None
    assert column.block_entities() == [sign]