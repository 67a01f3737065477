"""Carrier aggregate: a transport company with a daily shipment allowance."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fulfillment.domain.exceptions import InvalidArgumentError, InvalidOperationError


class CarrierStatus(Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


@dataclass
class Carrier:
    """Invariant: ``0 <= current_daily_shipments <= max_daily_capacity``."""

    id: int | None
    code: str
    name: str
    max_daily_capacity: int
    current_daily_shipments: int = 0
    status: CarrierStatus = CarrierStatus.ACTIVE

    def __post_init__(self) -> None:
        if self.max_daily_capacity < 0:
            raise InvalidArgumentError("Max daily capacity cannot be negative")
        if not 0 <= self.current_daily_shipments <= self.max_daily_capacity:
            raise InvalidArgumentError(
                f"Current daily shipments ({self.current_daily_shipments}) must be "
                f"between 0 and max daily capacity ({self.max_daily_capacity})"
            )

    @property
    def is_active(self) -> bool:
        return self.status == CarrierStatus.ACTIVE

    @property
    def available_capacity(self) -> int:
        return self.max_daily_capacity - self.current_daily_shipments

    def has_room_for(self, count: int = 1) -> bool:
        return self.current_daily_shipments + count <= self.max_daily_capacity

    def take_slots(self, count: int = 1) -> None:
        if not self.has_room_for(count):
            raise InvalidOperationError(
                f"Carrier {self.code} cannot take {count} more shipment(s): "
                f"{self.current_daily_shipments}/{self.max_daily_capacity} used"
            )
        self.current_daily_shipments += count

    def free_slot(self) -> None:
        if self.current_daily_shipments > 0:
            self.current_daily_shipments -= 1

    def reset_daily_shipments(self) -> None:
        self.current_daily_shipments = 0

    def change_status(self, status: CarrierStatus) -> None:
        self.status = status
