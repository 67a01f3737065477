"""Application service: Register Carrier use case."""

from __future__ import annotations

from fulfillment.application.dto import CarrierDTO, carrier_to_dto
from fulfillment.domain.exceptions import DuplicateResourceError, InvalidArgumentError
from fulfillment.domain.model.carrier import Carrier
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class RegisterCarrierHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, code: str, name: str, max_daily_capacity: int) -> CarrierDTO:
        """Register a new ACTIVE carrier with an empty daily counter."""
        if not code or not code.strip():
            raise InvalidArgumentError("Carrier code is required")

        with self._uow as uow:
            if uow.carriers.get_by_code(code.strip()) is not None:
                raise DuplicateResourceError(f"Carrier already exists with code: '{code}'")

            carrier = Carrier(
                id=None,
                code=code.strip(),
                name=name.strip(),
                max_daily_capacity=max_daily_capacity,
            )
            uow.carriers.save(carrier)
            return carrier_to_dto(carrier)
