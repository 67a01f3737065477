"""Application service: Show Carriers use case (queries)."""

from __future__ import annotations

from fulfillment.application.dto import CarrierDTO, carrier_to_dto
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class ShowCarriersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, available_only: bool = False) -> list[CarrierDTO]:
        """List carriers; ``available_only`` keeps ACTIVE ones with room left today."""
        with self._uow as uow:
            carriers = sorted(uow.carriers.list_all(), key=lambda c: c.id)  # type: ignore[arg-type, return-value]
            if available_only:
                carriers = [c for c in carriers if c.is_active and c.available_capacity > 0]
            return [carrier_to_dto(c) for c in carriers]

    def get(self, carrier_id: int) -> CarrierDTO:
        with self._uow as uow:
            carrier = uow.carriers.get_by_id(carrier_id)
            if carrier is None:
                raise ResourceNotFoundError.of("Carrier", "id", carrier_id)
            return carrier_to_dto(carrier)
