"""Application service: Update Carrier Status use case."""

from __future__ import annotations

from fulfillment.application.dto import CarrierDTO, carrier_to_dto
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.model.carrier import CarrierStatus
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class UpdateCarrierStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, carrier_id: int, status: CarrierStatus) -> CarrierDTO:
        with self._uow as uow:
            carrier = uow.carriers.get_by_id(carrier_id)
            if carrier is None:
                raise ResourceNotFoundError.of("Carrier", "id", carrier_id)
            carrier.change_status(status)
            uow.carriers.save(carrier)
            return carrier_to_dto(carrier)
