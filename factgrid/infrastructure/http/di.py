"""DI provider for the outbound HTTP client shared by adapters and probes."""

from typing import AsyncIterable, NewType

import httpx
from dishka import provide

from factgrid.config import Config, HttpConfig
from factgrid.util.di.base import Provider
from factgrid.util.di.scope import Scope

UpstreamHttpClient = NewType("UpstreamHttpClient", httpx.AsyncClient)


def create_upstream_client(config: HttpConfig) -> httpx.AsyncClient:
    timeout = httpx.Timeout(
        connect=config.connect_timeout,
        read=config.read_timeout,
        write=5.0,
        pool=5.0,
    )
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": config.user_agent},
    )


class HttpProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_upstream_client(self, config: Config) -> AsyncIterable[UpstreamHttpClient]:
        client = create_upstream_client(config.http)
        yield UpstreamHttpClient(client)
        await client.aclose()
