import uuid

from blockcraft.attribute import Attribute, Modifier, ModifierOperation
from blockcraft.entity import (
    Creeper,
    Entity,
    EntityType,
    LivingEntity,
    Monster,
    PaintingDirection,
    PaintingEntity,
    PlayerEntity,
    XPOrb,
)


def test_entity_type_values_fixed_by_protocol():
    assert EntityType.ITEM.value == 1
    assert EntityType.CREEPER.value == 50
    assert EntityType.PLAYER.value == 254
    assert EntityType(120) is EntityType.VILLAGER


def test_new_entity_defaults():
    entity = Entity(7)
    assert entity.entity_id == 7
    assert entity.vehicle_id == -1
    assert entity.type is EntityType.UNKNOWN
    assert entity.attributes == {}


def test_missing_attribute_is_empty_with_zero_base():
    entity = Entity(1)
    attribute = entity.get_attribute("generic.maxHealth")
    assert attribute.key == "generic.maxHealth"
    assert attribute.base_amount == 0
    assert attribute.modifiers == []
    assert "generic.maxHealth" not in entity.attributes


def test_set_attribute_replaces_existing():
    entity = Entity(1)
    entity.set_attribute("speed", Attribute("speed", 1.0))
    entity.set_attribute("speed", Attribute("speed", 2.5))
    assert entity.get_attribute("speed").base_amount == 2.5
    assert len(entity.attributes) == 1


def test_get_attribute_returns_independent_copy():
    entity = Entity(1)
    entity.set_attribute("speed", Attribute("speed", 1.0))
    copy = entity.get_attribute("speed")
    copy.add_modifier(Modifier(uuid.uuid4(), 1.0, ModifierOperation.ADD))
    assert entity.get_attribute("speed").modifiers == []
    assert copy.value() == 2.0


def test_clear_attributes():
    entity = Entity(1)
    entity.set_attribute("a", Attribute("a", 1.0))
    entity.set_attribute("b", Attribute("b", 2.0))
    entity.clear_attributes()
    assert entity.attributes == {}
    assert entity.get_attribute("a").base_amount == 0


def test_painting_defaults():
    painting = PaintingEntity(3)
    assert painting.type is EntityType.PAINTING
    assert painting.title == ""
    assert painting.direction is PaintingDirection.SOUTH


def test_xp_orb_type_and_count():
    orb = XPOrb(4, count=12)
    assert orb.type is EntityType.XP_ORB
    assert orb.count == 12
    assert XPOrb(5).count == 0


def test_class_hierarchy():
    assert isinstance(PlayerEntity(1), LivingEntity)
    assert isinstance(Creeper(2), Monster)
    assert isinstance(Monster(3), LivingEntity)
    assert LivingEntity(9).health == 0.0


def test_position_and_vehicle_can_be_set():
    entity = Entity(1)
    entity.position = (1.5, 64.0, -3.0)
    entity.vehicle_id = 42
    assert entity.position == (1.5, 64.0, -3.0)
    assert entity.vehicle_id == 42