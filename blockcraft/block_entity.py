"""Block entities: the extra state some blocks carry, such as chests or signs."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

Position = tuple[int, int, int]

SIGN_LINES = 4


class BlockEntityType(Enum):
    BANNER = auto()
    BEACON = auto()
    BED = auto()
    CAULDRON = auto()
    BREWING_STAND = auto()
    CHEST = auto()
    COMPARATOR = auto()
    COMMAND_BLOCK = auto()
    DAYLIGHT_SENSOR = auto()
    DISPENSER = auto()
    DROPPER = auto()
    ENCHANTING_TABLE = auto()
    ENDER_CHEST = auto()
    END_GATEWAY = auto()
    END_PORTAL = auto()
    FLOWER_POT = auto()
    FURNACE = auto()
    HOPPER = auto()
    JUKEBOX = auto()
    MONSTER_SPAWNER = auto()
    NOTEBLOCK = auto()
    PISTON = auto()
    SHULKER_BOX = auto()
    SIGN = auto()
    SKULL = auto()
    STRUCTURE_BLOCK = auto()
    TRAPPED_CHEST = auto()
    UNKNOWN = auto()


@dataclass
class BlockEntity:
    """Common state of every block entity: its kind, position and raw tag data."""

    type: BlockEntityType
    position: Position
    nbt: dict[str, Any] = field(default_factory=dict)


@dataclass(kw_only=True)
class InventoryBlock:
    """Items held by containers such as chests, dispensers and furnaces."""

    lock: str = ""
    items: dict[int, Any] = field(default_factory=dict)
    loot_table: str = ""
    loot_table_seed: int = 0


@dataclass(frozen=True)
class BannerPattern:
    color: int
    section: str


@dataclass
class Banner(BlockEntity):
    patterns: list[BannerPattern] = field(default_factory=list)
    base_color: int = 0


@dataclass
class Beacon(BlockEntity):
    lock: str = ""
    levels: int = 0
    primary: int = 0
    secondary: int = 0


@dataclass
class Bed(BlockEntity):
    color: int = 0


@dataclass
class BrewingStand(BlockEntity, InventoryBlock):
    brew_time: int = 0
    fuel: int = 0


@dataclass
class Chest(BlockEntity, InventoryBlock):
    pass


@dataclass
class Dispenser(BlockEntity, InventoryBlock):
    pass


@dataclass
class Dropper(BlockEntity, InventoryBlock):
    pass


@dataclass
class EnchantmentTable(BlockEntity):
    pass


@dataclass
class EndGateway(BlockEntity):
    age: int = 0
    exact_teleport: bool = False
    exit: Position = (0, 0, 0)


@dataclass
class FlowerPot(BlockEntity):
    item_id: str = ""
    item_data: int = 0


@dataclass
class Furnace(BlockEntity, InventoryBlock):
    # Ticks left before the current fuel runs out.
    burn_time: int = 0
    # Ticks the item has been smelting; resets when burn_time reaches 0.
    cook_time: int = 0
    # Ticks it takes for the item to be smelted.
    cook_time_total: int = 0


@dataclass
class Hopper(BlockEntity, InventoryBlock):
    transfer_cooldown: int = 0


@dataclass
class Jukebox(BlockEntity):
    record_id: int = 0
    record_item: Any = None


@dataclass(frozen=True)
class SpawnPotential:
    type: str
    weight: int


@dataclass
class MonsterSpawner(BlockEntity):
    spawn_potentials: list[SpawnPotential] = field(default_factory=list)
    entity_id: str = ""
    spawn_count: int = 0
    spawn_range: int = 0
    delay: int = 0
    min_spawn_delay: int = 0
    max_spawn_delay: int = 0
    max_nearby_entities: int = 0
    required_player_range: int = 0


@dataclass
class NoteBlock(BlockEntity):
    note: int = 0
    powered: int = 0

    def is_powered(self) -> bool:
        return self.powered != 0


@dataclass
class Piston(BlockEntity):
    """State shared by a piston and the block it is moving."""

    block_id: int = 0
    block_data: int = 0
    facing: int = 0
    progress: float = 0.0
    # True for the block being pushed.
    extending: bool = False
    # True for the piston itself.
    source: bool = False


@dataclass
class RedstoneComparator(BlockEntity):
    output_signal: int = 0


@dataclass
class ShulkerBox(BlockEntity, InventoryBlock):
    pass


@dataclass
class Sign(BlockEntity):
    text: list[str] = field(default_factory=lambda: [""] * SIGN_LINES)

    def __post_init__(self) -> None:
        if len(self.text) != SIGN_LINES:
            raise ValueError(f"a sign holds exactly {SIGN_LINES} lines, got {len(self.text)}")

    def get_text(self, index: int) -> str:
        """Return one line of the sign; raises IndexError outside 0..3."""
        if not 0 <= index < SIGN_LINES:
            raise IndexError(f"sign line {index} out of range")
        return self.text[index]


class SkullType(Enum):
    SKELETON = 0
    WITHER_SKELETON = 1
    ZOMBIE = 2
    HEAD = 3
    CREEPER = 4
    DRAGON = 5


@dataclass(frozen=True)
class SkullTexture:
    signature: str
    value: str


@dataclass
class Skull(BlockEntity):
    skull_type: SkullType = SkullType.SKELETON
    rotation: int = 0
    owner_uuid: uuid.UUID = field(default_factory=lambda: uuid.UUID(int=0))
    owner_name: str = ""
    textures: list[SkullTexture] = field(default_factory=list)