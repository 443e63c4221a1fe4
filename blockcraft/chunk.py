"""Chunk sections and the columns of sections that make up the world."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

from .block import Block, BlockRegistry, default_registry
from .block_entity import BlockEntity

SECTION_SIZE = 16
CHUNKS_PER_COLUMN = 16
BLOCKS_PER_SECTION = SECTION_SIZE * SECTION_SIZE * SECTION_SIZE
LIGHT_SIZE = BLOCKS_PER_SECTION // 2
DEFAULT_BITS_PER_BLOCK = 4
# Sections with this many bits per block or more store block ids directly.
DIRECT_PALETTE_BITS = 9

_LONG_BITS = 64
_U64 = (1 << _LONG_BITS) - 1

Position = tuple[int, int, int]


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise EOFError(f"expected {size} bytes, got {len(data)}")
    return data


def _read_varint(stream: BinaryIO) -> int:
    result = 0
    for shift in range(0, 35, 7):
        byte = _read_exact(stream, 1)[0]
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            result &= 0xFFFFFFFF
            return result - (1 << 32) if result & 0x80000000 else result
    raise ValueError("varint is longer than five bytes")


def _cdiv(value: int, divisor: int) -> int:
    """Integer division that truncates toward zero."""
    quotient = abs(value) // divisor
    return -quotient if value < 0 else quotient


def _cmod(value: int, divisor: int) -> int:
    """Remainder that keeps the sign of ``value``."""
    return value - divisor * _cdiv(value, divisor)


def _in_section(position: Position) -> bool:
    return all(0 <= coord < SECTION_SIZE for coord in position)


@dataclass
class ChunkColumnMetadata:
    x: int
    z: int
    section_mask: int
    continuous: bool = True
    skylight: bool = True


class Chunk:
    """A 16x16x16 section of blocks stored as packed palette indices."""

    def __init__(self, registry: BlockRegistry | None = None) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.bits_per_block = DEFAULT_BITS_PER_BLOCK
        self.palette: list[int] = []
        self.data: list[int] = []

    def load(self, stream: BinaryIO, meta: ChunkColumnMetadata) -> None:
        """Read one section from ``stream``, skipping its light data.

        Raises EOFError when the stream ends early.
        """
        self.bits_per_block = _read_exact(stream, 1)[0]
        palette_length = _read_varint(stream)
        self.palette = [_read_varint(stream) & 0xFFFF for _ in range(palette_length)]
        data_length = _read_varint(stream)
        self.data = [
            struct.unpack(">Q", _read_exact(stream, 8))[0] for _ in range(data_length)
        ]
        _read_exact(stream, LIGHT_SIZE)
        if meta.skylight:
            _read_exact(stream, LIGHT_SIZE)

    def _layout(self, position: Position) -> tuple[int, int, int, int]:
        x, y, z = position
        bits = self.bits_per_block
        index = y * SECTION_SIZE * SECTION_SIZE + z * SECTION_SIZE + x
        bit_index = index * bits
        start = bit_index // _LONG_BITS
        end = ((index + 1) * bits - 1) // _LONG_BITS
        return start, end, bit_index % _LONG_BITS, (1 << bits) - 1

    def get_block(self, position: Position) -> Block | None:
        """Return the block at a position relative to this section.

        Positions outside the section, and sections without data, give air.
        """
        if not _in_section(position) or not self.data:
            return self.registry.get_block(0)

        start, end, start_sub, max_value = self._layout(position)
        if start == end:
            value = (self.data[start] >> start_sub) & max_value
        else:
            end_sub = _LONG_BITS - start_sub
            value = (
                (self.data[start] >> start_sub) | ((self.data[end] << end_sub) & _U64)
            ) & max_value

        if self.bits_per_block < DIRECT_PALETTE_BITS:
            block_type = self.palette[value]
        else:
            block_type = value
        return self.registry.get_block(block_type & 0xFFFF)

    def set_block(self, position: Position, block: Block) -> None:
        """Store ``block`` at a position relative to this section."""
        if not _in_section(position):
            raise IndexError(f"position {position} is outside the section")
        if self.bits_per_block == 0:
            self.bits_per_block = DEFAULT_BITS_PER_BLOCK

        if not self.data:
            self.palette.append(0)
            self.data = [0] * (BLOCKS_PER_SECTION * self.bits_per_block // _LONG_BITS)

        block_type = block.data
        if self.bits_per_block < DIRECT_PALETTE_BITS:
            try:
                value = self.palette.index(block_type)
            except ValueError:
                self.palette.append(block_type)
                value = len(self.palette) - 1
        else:
            value = block_type

        start, end, start_sub, max_value = self._layout(position)
        value &= max_value
        self.data[start] = (
            (self.data[start] & ~(max_value << start_sub)) | (value << start_sub)
        ) & _U64

        if start != end:
            end_sub = _LONG_BITS - start_sub
            self.data[end] = (
                (self.data[end] >> end_sub << end_sub) | (value >> end_sub)
            ) & _U64


class ChunkColumn:
    """A vertical stack of sections plus the block entities inside it."""

    def __init__(
        self, metadata: ChunkColumnMetadata, registry: BlockRegistry | None = None
    ) -> None:
        self.metadata = metadata
        self.registry = registry if registry is not None else default_registry()
        self._chunks: list[Chunk | None] = [None] * CHUNKS_PER_COLUMN
        self._block_entities: dict[Position, BlockEntity] = {}

    def read_sections(self, stream: BinaryIO) -> None:
        """Load every section named by the section mask; the rest stay empty."""
        for index in range(CHUNKS_PER_COLUMN):
            if self.metadata.section_mask & (1 << index):
                chunk = Chunk(self.registry)
                chunk.load(stream, self.metadata)
                self._chunks[index] = chunk
            else:
                self._chunks[index] = None

    def get_block(self, position: Position) -> Block | None:
        """Return the block at a column-relative x and z and an absolute y."""
        x, y, z = position
        index = _cdiv(y, SECTION_SIZE)
        if not 0 <= index < CHUNKS_PER_COLUMN or self._chunks[index] is None:
            return self.registry.get_block(0)
        return self._chunks[index].get_block((x, _cmod(y, SECTION_SIZE), z))

    def get_block_entity(self, position: Position) -> BlockEntity | None:
        return self._block_entities.get(tuple(position))

    def add_block_entity(self, entity: BlockEntity) -> None:
        self._block_entities[tuple(entity.position)] = entity

    def remove_block_entity(self, position: Position) -> None:
        self._block_entities.pop(tuple(position), None)

    def block_entities(self) -> list[BlockEntity]:
        return list(self._block_entities.values())

    @staticmethod
    def _check_index(index: int) -> None:
        if not 0 <= index < CHUNKS_PER_COLUMN:
            raise IndexError(f"section index {index} out of range")

    def __getitem__(self, index: int) -> Chunk | None:
        self._check_index(index)
        return self._chunks[index]

    def __setitem__(self, index: int, chunk: Chunk | None) -> None:
        self._check_index(index)
        self._chunks[index] = chunk