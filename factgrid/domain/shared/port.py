from abc import abstractmethod
from typing import Protocol


class Port(Protocol):
    """Marker base for interfaces implemented by the infrastructure layer."""


class UnitOfWork(Port, Protocol):
    """Commit boundary for the current scope.

    Orchestrators commit once per dataset so that no transaction spans
    more than one dataset.
    """

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...
