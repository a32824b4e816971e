from factgrid.infrastructure.http.di import HttpProvider, UpstreamHttpClient

__all__ = ["HttpProvider", "UpstreamHttpClient"]
