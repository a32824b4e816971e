from factgrid.infrastructure.source.di import SourceProvider

__all__ = ["SourceProvider"]
