"""Block types, their bounding boxes and the registry that maps ids to blocks."""

from __future__ import annotations

from dataclasses import dataclass

Vector3 = tuple[float, float, float]

_ORIGIN: Vector3 = (0.0, 0.0, 0.0)


def _to_int_vector(at: tuple[float, float, float]) -> tuple[int, int, int]:
    x, y, z = at
    return int(x), int(y), int(z)


@dataclass(frozen=True)
class BoundingBox:
    """An axis-aligned box given by its minimum and maximum corners."""

    min: Vector3 = _ORIGIN
    max: Vector3 = _ORIGIN

    def intersects(self, other: BoundingBox) -> bool:
        """Return True when the two boxes overlap; touching faces do not count."""
        return all(
            self.max[axis] > other.min[axis] and self.min[axis] < other.max[axis]
            for axis in range(3)
        )

    def offset(self, delta: tuple[float, float, float]) -> BoundingBox:
        """Return a copy of this box moved by ``delta``."""
        dx, dy, dz = delta
        return BoundingBox(
            (self.min[0] + dx, self.min[1] + dy, self.min[2] + dz),
            (self.max[0] + dx, self.max[1] + dy, self.max[2] + dz),
        )


class Block:
    """A kind of block, identified by its packed type and meta value."""

    def __init__(
        self,
        name: str,
        data: int,
        solid: bool = True,
        bounding_box: BoundingBox | None = None,
    ) -> None:
        self.name = name
        self.data = data
        self.solid = solid
        self.bounding_box = bounding_box if bounding_box is not None else BoundingBox()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Block):
            return NotImplemented
        return self.data == other.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"Block(name={self.name!r}, data={self.data})"

    def is_opaque(self) -> bool:
        """A block is opaque when its bounding box is not empty at the origin."""
        return self.bounding_box.min != _ORIGIN or self.bounding_box.max != _ORIGIN

    def world_bounding_box(self, at: tuple[float, float, float]) -> BoundingBox:
        """Return the bounding box placed at the world position ``at``.

        Fractional positions are truncated to whole block coordinates.
        """
        return self.bounding_box.offset(_to_int_vector(at))

    def collides_with(
        self, at: tuple[int, int, int], other: BoundingBox
    ) -> tuple[bool, BoundingBox]:
        """Check this block at ``at`` against ``other``; returns (hit, world box)."""
        box = self.bounding_box.offset(at)
        return box.intersects(other), box

    def bounding_boxes(self) -> list[BoundingBox]:
        """Return the raw boxes of this block, not moved to any position."""
        return [self.bounding_box]


class BlockRegistry:
    """Looks blocks up by packed id or by name."""

    def __init__(self) -> None:
        self._blocks: dict[int, Block] = {}
        self._names: dict[str, Block] = {}

    def __len__(self) -> int:
        return len(self._blocks)

    def get_block(self, data: int) -> Block | None:
        """Find a block by packed id, falling back to its meta-less base form."""
        block = self._blocks.get(data)
        if block is None:
            block = self._blocks.get(data & ~15)
        return block

    def get_block_by_meta(self, block_type: int, meta: int) -> Block | None:
        data = ((block_type << 4) | (meta & 15)) & 0xFFFF
        return self.get_block(data)

    def get_block_by_name(self, name: str) -> Block | None:
        return self._names.get(name)

    def register_block(self, block: Block) -> None:
        self._blocks[block.data] = block
        self._names[block.name] = block

    def clear(self) -> None:
        self._blocks.clear()
        self._names.clear()


_DEFAULT_REGISTRY = BlockRegistry()


def default_registry() -> BlockRegistry:
    """Return the registry shared by the whole process."""
    return _DEFAULT_REGISTRY