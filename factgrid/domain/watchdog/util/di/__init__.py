from factgrid.domain.watchdog.util.di.provider import WatchdogProvider

__all__ = ["WatchdogProvider"]
