"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from datetime import timedelta

from fulfillment.infrastructure.config import Settings, get_settings
from fulfillment.infrastructure.persistence.unit_of_work import JsonUnitOfWork


def unit_of_work(settings: Settings | None = None) -> JsonUnitOfWork:
    settings = settings if settings is not None else get_settings()
    return JsonUnitOfWork(settings.state_file)


def reservation_ttl(settings: Settings) -> timedelta:
    return timedelta(hours=settings.reservation_ttl_hours)
