"""Entities tracked by the client: mobs, objects and players."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .attribute import Attribute

Vector3 = tuple[float, float, float]


class EntityType(Enum):
    ITEM = 1
    XP_ORB = 2
    AREA_EFFECT_CLOUD = 3
    ELDER_GUARDIAN = 4
    WITHER_SKELETON = 5
    STRAY = 6
    THROWN_EGG = 7
    LEASH_KNOT = 8
    PAINTING = 9
    ARROW = 10
    SNOWBALL = 11
    FIREBALL = 12
    SMALL_FIREBALL = 13
    THROWN_ENDERPEARL = 14
    EYE_OF_ENDER_SIGNAL = 15
    THROWN_POTION = 16
    THROWN_EXP_BOTTLE = 17
    ITEM_FRAME = 18
    WITHER_SKULL = 19
    PRIMED_TNT = 20
    FALLING_SAND = 21
    FIREWORKS_ROCKET_ENTITY = 22
    HUSK = 23
    SPECTRAL_ARROW = 24
    SHULKER_BULLET = 25
    DRAGON_FIREBALL = 26
    ZOMBIE_VILLAGER = 27
    SKELETON_HORSE = 28
    ZOMBIE_HORSE = 29
    ARMOR_STAND = 30
    DONKEY = 31
    MULE = 32
    EVOCATION_FANGS = 33
    EVOCATION_ILLAGER = 34
    VEX = 35
    VINDICATION_ILLAGER = 36
    ILLUSION_ILLAGER = 37

    MINECART_COMMAND_BLOCK = 40
    BOAT = 41
    MINECART_RIDEABLE = 42
    MINECART_CHEST = 43
    MINECART_FURNACE = 44
    MINECART_TNT = 45
    MINECART_HOPPER = 46
    MINECART_SPAWNER = 47

    CREEPER = 50
    SKELETON = 51
    SPIDER = 52
    GIANT = 53
    ZOMBIE = 54
    SLIME = 55
    GHAST = 56
    PIG_ZOMBIE = 57
    ENDERMAN = 58
    CAVE_SPIDER = 59
    SILVERFISH = 60
    BLAZE = 61
    LAVA_SLIME = 62
    ENDER_DRAGON = 63
    WITHER_BOSS = 64
    BAT = 65
    WITCH = 66
    ENDERMITE = 67
    GUARDIAN = 68
    SHULKER = 69

    PIG = 90
    SHEEP = 91
    COW = 92
    CHICKEN = 93
    SQUID = 94
    WOLF = 95
    MOOSHROOM = 96
    SNOW_MAN = 97
    OCELOT = 98
    IRON_GOLEM = 99
    HORSE = 100
    RABBIT = 101
    POLAR_BEAR = 102
    LLAMA = 103
    LLAMA_SPIT = 104
    PARROT = 105

    VILLAGER = 120

    ENDER_CRYSTAL = 200

    # Not part of the protocol.
    LIGHTNING = 251
    FALLING_OBJECT = 252
    FISHING_HOOK = 253
    PLAYER = 254
    UNKNOWN = 255


def _copy_attribute(attribute: Attribute) -> Attribute:
    return Attribute(attribute.key, attribute.base_amount, list(attribute.modifiers))


@dataclass
class Entity:
    """State common to every entity. Angles are stored in radians."""

    entity_id: int
    position: Vector3 = (0.0, 0.0, 0.0)
    velocity: Vector3 = (0.0, 0.0, 0.0)
    yaw: float = 0.0
    pitch: float = 0.0
    head_pitch: float = 0.0
    vehicle_id: int = -1
    type: EntityType = EntityType.UNKNOWN
    metadata: dict[int, Any] = field(default_factory=dict)
    attributes: dict[str, Attribute] = field(default_factory=dict)

    def get_attribute(self, key: str) -> Attribute:
        """Return a copy of the attribute, or an empty one with base 0 if unknown."""
        attribute = self.attributes.get(key)
        if attribute is None:
            return Attribute(key, 0.0)
        return _copy_attribute(attribute)

    def set_attribute(self, key: str, attribute: Attribute) -> None:
        self.attributes.pop(key, None)
        self.attributes[key] = attribute

    def clear_attributes(self) -> None:
        self.attributes.clear()


@dataclass
class LivingEntity(Entity):
    health: float = 0.0


@dataclass
class PlayerEntity(LivingEntity):
    pass


class PaintingDirection(Enum):
    SOUTH = 0
    WEST = 1
    NORTH = 2
    EAST = 3


@dataclass
class PaintingEntity(Entity):
    type: EntityType = EntityType.PAINTING
    title: str = ""
    direction: PaintingDirection = PaintingDirection.SOUTH


@dataclass
class XPOrb(Entity):
    type: EntityType = EntityType.XP_ORB
    count: int = 0


@dataclass
class Monster(LivingEntity):
    pass


@dataclass
class Creeper(Monster):
    pass