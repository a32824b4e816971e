"""Custom Dishka scopes for factgrid."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """factgrid dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, HTTP client, registries)
    - UOW: Unit of Work (one HTTP request or one scheduled run)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
