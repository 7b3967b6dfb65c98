"""Fare calculation.

The fare of a journey is the distance-tiered base fare plus the highest
surcharge among the lines ridden, discounted by the passenger's age group.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Mapping

from .models import AgeGroup


@dataclass(frozen=True, slots=True)
class FareRules:
    """Constants of the fare table.

    Attributes:
        base_fare: Fare for any journey up to ``base_distance``
        base_distance: Distance covered by the base fare
        middle_distance: Upper bound of the middle tier
        middle_unit_distance: Distance per surcharge unit in the middle tier
        far_unit_distance: Distance per surcharge unit beyond the middle tier
        unit_fare: Fare added per started unit
        discount_deduction: Amount deducted before a rate discount applies
        teenager_rate: Share of the deducted fare paid by teenagers
        child_rate: Share of the deducted fare paid by children
    """

    base_fare: int = 1250
    base_distance: int = 10
    middle_distance: int = 50
    middle_unit_distance: int = 5
    far_unit_distance: int = 8
    unit_fare: int = 100
    discount_deduction: int = 350
    teenager_rate: float = 0.8
    child_rate: float = 0.5


def _units(distance: int, unit_distance: int) -> int:
    return -(-distance // unit_distance)


@dataclass(frozen=True)
class FareCalculator:
    """Computes the fare a passenger pays for a path.

    Attributes:
        extra_fares: Surcharge per line id
        age_group: Age group of the passenger
        rules: Fare table constants

    Example:
        calculator = FareCalculator({1: 0, 2: 500}, AgeGroup.from_age(21))
        fare = calculator.calculate(distance=3, line_ids={2})  # 1750
    """

    extra_fares: Mapping[int, int]
    age_group: AgeGroup
    rules: FareRules = field(default_factory=FareRules)

    def base_fare(self, distance: int) -> int:
        """Distance-tiered fare before surcharge and discount."""
        rules = self.rules
        if distance <= rules.base_distance:
            return rules.base_fare

        fare = rules.base_fare
        middle = min(distance, rules.middle_distance) - rules.base_distance
        fare += rules.unit_fare * _units(middle, rules.middle_unit_distance)

        if distance > rules.middle_distance:
            far = distance - rules.middle_distance
            fare += rules.unit_fare * _units(far, rules.far_unit_distance)
        return fare

    def surcharge(self, line_ids: Iterable[int]) -> int:
        """Highest extra fare among the given lines, 0 when none."""
        return max((self.extra_fares.get(line_id, 0) for line_id in line_ids), default=0)

    def discount(self, fare: int) -> int:
        """Apply the age-group discount to a pre-discount fare."""
        if self.age_group is AgeGroup.ADULT:
            return fare
        if self.age_group is AgeGroup.INFANT:
            return 0

        rate = (
            self.rules.teenager_rate
            if self.age_group is AgeGroup.TEENAGER
            else self.rules.child_rate
        )
        deducted = max(fare - self.rules.discount_deduction, 0)
        return math.floor(Decimal(deducted) * Decimal(str(rate)))

    def calculate(self, distance: int, line_ids: Iterable[int]) -> int:
        """Final fare for a journey.

        Args:
            distance: Total distance travelled.
            line_ids: Lines whose sections were ridden.

        Returns:
            The non-negative fare to pay.
        """
        return self.discount(self.base_fare(distance) + self.surcharge(line_ids))
