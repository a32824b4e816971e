"""Custom Dishka FastAPI integration using Scope.UOW."""

from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from dishka import AsyncContainer

from factgrid.util.di.scope import Scope as FactGridScope


class ContainerMiddleware:
    """ASGI middleware that opens a Scope.UOW container for each HTTP request.

    Replaces dishka.integrations.starlette.ContainerMiddleware, which only
    knows about dishka.Scope.REQUEST.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive, send=send)
        async with request.app.state.dishka_container(
            {Request: request},
            scope=FactGridScope.UOW,
        ) as request_container:
            request.state.dishka_container = request_container
            return await self.app(scope, receive, send)


def setup_dishka(container: AsyncContainer, app) -> None:
    """Install the UOW middleware and attach the container to the app."""
    app.add_middleware(ContainerMiddleware)
    app.state.dishka_container = container
