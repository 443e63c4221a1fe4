"""Entity attributes and the modifiers applied to them."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum


class ModifierOperation(Enum):
    """How a modifier changes an attribute, in order of application."""

    ADD = 0
    ADD_PERCENT = 1
    MULTIPLY_PERCENT = 2


@dataclass(frozen=True)
class Modifier:
    uuid: uuid.UUID
    amount: float
    operation: ModifierOperation


@dataclass
class Attribute:
    key: str
    base_amount: float
    modifiers: list[Modifier] = field(default_factory=list)

    def value(self) -> float:
        """Return the amount after all modifiers have been applied.

        Additions come first, then percentages of the added total, then
        multiplications.
        """
        amount = self.base_amount
        for modifier in self._of(ModifierOperation.ADD):
            amount += modifier.amount

        added = amount
        for modifier in self._of(ModifierOperation.ADD_PERCENT):
            amount += added * modifier.amount

        for modifier in self._of(ModifierOperation.MULTIPLY_PERCENT):
            amount *= 1 + modifier.amount
        return amount

    def add_modifier(self, modifier: Modifier) -> None:
        self.modifiers.append(modifier)

    def _of(self, operation: ModifierOperation) -> list[Modifier]:
        return [m for m in self.modifiers if m.operation is operation]