"""The loaded world: chunk columns keyed by chunk coordinates."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any, Sequence

from .block import Block, BlockRegistry, default_registry
from .block_entity import BlockEntity
from .chunk import (
    CHUNKS_PER_COLUMN,
    SECTION_SIZE,
    Chunk,
    ChunkColumn,
    ChunkColumnMetadata,
)
from .observer import ObserverSubject

Position = tuple[int, int, int]
ChunkCoord = tuple[int, int]


class WorldListener:
    """Receives world events; by default each one is appended to ``events``.

    Subclasses override the methods they care about.
    """

    @property
    def events(self) -> list[tuple[str, tuple[Any, ...]]]:
        """Events received by the default handlers, oldest first."""
        return self.__dict__.setdefault("_events", [])

    def _record(self, name: str, *args: Any) -> None:
        self.events.append((name, args))

    def on_block_change(
        self, position: Position, new_block: Block | None, old_block: Block | None
    ) -> None:
        self._record("block_change", position, new_block, old_block)

    def on_chunk_load(
        self, chunk: Chunk | None, meta: ChunkColumnMetadata, index: int
    ) -> None:
        self._record("chunk_load", chunk, meta, index)

    def on_chunk_unload(self, column: ChunkColumn | None) -> None:
        self._record("chunk_unload", column)


def _floor_position(position: Sequence[float]) -> Position:
    x, y, z = position
    return math.floor(x), math.floor(y), math.floor(z)


def _truncate_position(position: Sequence[float]) -> Position:
    x, y, z = position
    return int(x), int(y), int(z)


class World(ObserverSubject):
    """Tracks chunk columns and applies block updates from the server."""

    def __init__(self, registry: BlockRegistry | None = None) -> None:
        super().__init__()
        self.registry = registry if registry is not None else default_registry()
        self._chunks: dict[ChunkCoord, ChunkColumn | None] = {}

    def get_chunk(self, position: Sequence[float]) -> ChunkColumn | None:
        """Return the column holding a world position, or None if not loaded."""
        x, _, z = position
        return self._chunks.get((math.floor(x) // SECTION_SIZE, math.floor(z) // SECTION_SIZE))

    def set_block(self, position: Position, block_data: int) -> bool:
        """Set a block; returns False when its chunk is not loaded.

        Raises ValueError when ``block_data`` names no registered block and
        IndexError when the height is outside the column.
        """
        column = self.get_chunk(position)
        if column is None:
            return False

        x, y, z = position
        index = y // SECTION_SIZE
        block = self.registry.get_block(block_data)
        if column[index] is None:
            column[index] = Chunk(self.registry)
        if block is None:
            raise ValueError(f"unknown block id {block_data}")
        column[index].set_block((x % SECTION_SIZE, y % SECTION_SIZE, z % SECTION_SIZE), block)
        return True

    def get_block(self, position: Sequence[float]) -> Block | None:
        """Return the block at a world position; unloaded areas read as air."""
        x, y, z = _floor_position(position)
        column = self.get_chunk((x, y, z))
        if column is None:
            return self.registry.get_block(0)
        return column.get_block((x % SECTION_SIZE, y, z % SECTION_SIZE))

    def get_block_entity(self, position: Position) -> BlockEntity | None:
        column = self.get_chunk(position)
        if column is None:
            return None
        return column.get_block_entity(position)

    def block_entities(self) -> list[BlockEntity]:
        return [
            entity
            for column in self._chunks.values()
            if column is not None
            for entity in column.block_entities()
        ]

    def handle_chunk_data(self, column: ChunkColumn) -> None:
        """Store a received column, or merge a partial one into the loaded column."""
        meta = column.metadata
        key = (meta.x, meta.z)

        if meta.continuous and meta.section_mask == 0:
            self._chunks[key] = None
            return

        if not meta.continuous:
            existing = self._chunks.get(key)
            if existing is None:
                raise KeyError(f"partial data for chunk {key} that is not loaded")
            for index in range(CHUNKS_PER_COLUMN):
                if meta.section_mask & (1 << index):
                    existing[index] = column[index]
        else:
            self._chunks[key] = column

        for index in range(CHUNKS_PER_COLUMN):
            self.notify_listeners("on_chunk_load", column[index], meta, index)

    def handle_multi_block_change(
        self,
        chunk_x: int,
        chunk_z: int,
        changes: Iterable[tuple[int, int, int, int]],
    ) -> None:
        """Apply (x, y, z, block_data) changes relative to one chunk column."""
        column = self._chunks.get((chunk_x, chunk_z))
        if column is None:
            return
        start_x, start_z = chunk_x * SECTION_SIZE, chunk_z * SECTION_SIZE

        for x, y, z, block_data in changes:
            world_pos = (start_x + x, y, start_z + z)
            column.remove_block_entity(world_pos)

            index = y // SECTION_SIZE
            old_block = self.registry.get_block(0)
            if column[index] is None:
                column[index] = Chunk(self.registry)
            else:
                old_block = column.get_block((x, y, z))

            new_block = self.registry.get_block(block_data)
            if new_block is None:
                raise ValueError(f"unknown block id {block_data}")
            column[index].set_block((x, y % SECTION_SIZE, z), new_block)
            self.notify_listeners("on_block_change", world_pos, new_block, old_block)

    def handle_block_change(self, position: Position, block_data: int) -> None:
        new_block = self.registry.get_block(block_data & 0xFFFF)
        old_block = self.get_block(position)

        self.set_block(position, block_data)
        self.notify_listeners("on_block_change", position, new_block, old_block)

        column = self.get_chunk(position)
        if column is not None:
            column.remove_block_entity(position)

    def handle_explosion(
        self, position: Sequence[float], offsets: Iterable[Sequence[int]]
    ) -> None:
        """Turn every affected block into air."""
        px, py, pz = position
        for dx, dy, dz in offsets:
            absolute = (px + dx, py + dy, pz + dz)
            old_block = self.get_block(absolute)
            target = _truncate_position(absolute)
            self.set_block(target, 0)
            new_block = self.registry.get_block(0)
            self.notify_listeners("on_block_change", target, new_block, old_block)

    def handle_update_block_entity(
        self, position: Position, entity: BlockEntity | None
    ) -> None:
        column = self.get_chunk(position)
        if column is None:
            return
        column.remove_block_entity(position)
        if entity is not None:
            column.add_block_entity(entity)

    def handle_unload_chunk(self, chunk_x: int, chunk_z: int) -> None:
        key = (chunk_x, chunk_z)
        if key not in self._chunks:
            return
        self.notify_listeners("on_chunk_unload", self._chunks[key])
        del self._chunks[key]

    def handle_respawn(self) -> None:
        """Drop every column; the server sends them again after a respawn."""
        for column in self._chunks.values():
            self.notify_listeners("on_chunk_unload", column)
        self._chunks.clear()