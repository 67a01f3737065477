"""State shared by every command of one CLI invocation."""

from __future__ import annotations

from dataclasses import dataclass, field

import click

from fulfillment.application.access_policy import AccessPolicy, Caller
from fulfillment.domain.exceptions import DomainException
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.infrastructure.bootstrap import unit_of_work
from fulfillment.infrastructure.config import Settings

# Exit status per error category (status_code of the domain exception).
EXIT_CODES = {404: 3, 409: 4, 400: 5, 403: 6}


class DomainClickException(click.ClickException):

    def __init__(self, exc: DomainException) -> None:
        super().__init__(str(exc))
        self.exit_code = EXIT_CODES.get(exc.status_code, 1)


@dataclass
class CliContext:
    settings: Settings
    caller: Caller
    policy: AccessPolicy = field(default_factory=AccessPolicy)

    def authorize(self, operation: str, owner_client_id: int | None = None) -> None:
        self.policy.authorize(self.caller, operation, owner_client_id)

    def uow(self) -> UnitOfWork:
        return unit_of_work(self.settings)


pass_context = click.make_pass_decorator(CliContext)
