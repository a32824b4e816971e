from factgrid.domain.refresh.service.refresh import RefreshService

__all__ = ["RefreshService"]
