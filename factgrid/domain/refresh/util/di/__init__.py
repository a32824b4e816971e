from factgrid.domain.refresh.util.di.provider import RefreshProvider

__all__ = ["RefreshProvider"]
