from factgrid.domain.watchdog.service.watchdog import WatchdogService

__all__ = ["WatchdogService"]
