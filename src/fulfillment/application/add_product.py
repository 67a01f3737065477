"""Application service: Add Product use case."""

from __future__ import annotations

from fulfillment.domain.exceptions import DuplicateResourceError, InvalidArgumentError
from fulfillment.domain.model.catalog import Product
from fulfillment.domain.model.value_objects import Money
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, sku: str, name: str, price: str, category: str = "") -> Product:
        """Add a new product to the catalog."""
        if not sku or not sku.strip():
            raise InvalidArgumentError("Product SKU is required")
        if not name or not name.strip():
            raise InvalidArgumentError("Product name is required")

        amount = Money.of(price)
        if amount.amount <= 0:
            raise InvalidArgumentError("Product price must be greater than zero")

        with self._uow as uow:
            if uow.products.get_by_sku(sku.strip()) is not None:
                raise DuplicateResourceError(f"Product already exists with sku: '{sku}'")

            product = Product(
                id=None,
                sku=sku.strip(),
                name=name.strip(),
                price=amount,
                category=category.strip(),
            )
            uow.products.save(product)
            return product
