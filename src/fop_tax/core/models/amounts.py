"""Quarter-indexed money slots."""

from decimal import Decimal

from pydantic import BaseModel, Field, model_serializer, model_validator

from fop_tax.core.models.enums import Quarter
from fop_tax.shared.money import ZERO

_ZERO_SLOTS = (ZERO, ZERO, ZERO, ZERO)


class QuarterlyAmounts(BaseModel):
    """Four money slots, one per fiscal quarter.

    Indexed by ``Quarter``: ``amounts[Quarter.Q2]``. Serialized as a
    four-element list.
    """

    values: tuple[Decimal, Decimal, Decimal, Decimal] = Field(default=_ZERO_SLOTS)

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def from_sequence(cls, data: object) -> object:
        """Accept the stored four-element list form."""
        if isinstance(data, (list, tuple)):
            return {"values": tuple(data)}
        return data

    @model_serializer
    def to_list(self) -> list[Decimal]:
        return list(self.values)

    @classmethod
    def zero(cls) -> "QuarterlyAmounts":
        """Return all-zero slots."""
        return cls(values=_ZERO_SLOTS)

    @classmethod
    def from_list(cls, values: list[Decimal]) -> "QuarterlyAmounts":
        """Build from a list of four values in quarter order."""
        if len(values) != 4:
            raise ValueError("Потрібно рівно 4 квартальні значення")
        return cls(values=tuple(values))

    def __getitem__(self, quarter: Quarter | int) -> Decimal:
        return self.values[Quarter(quarter).index]

    def replace(self, quarter: Quarter | int, value: Decimal) -> "QuarterlyAmounts":
        """Return a copy with one slot replaced."""
        slots = list(self.values)
        slots[Quarter(quarter).index] = value
        return QuarterlyAmounts(values=tuple(slots))

    def add(self, quarter: Quarter | int, value: Decimal) -> "QuarterlyAmounts":
        """Return a copy with ``value`` added to one slot."""
        return self.replace(quarter, self[quarter] + value)

    def through(self, quarter: Quarter | int) -> Decimal:
        """Sum of slots from Q1 up to and including ``quarter``."""
        return sum(self.values[: Quarter(quarter).value], ZERO)

    def total(self) -> Decimal:
        """Sum of all four slots."""
        return sum(self.values, ZERO)
