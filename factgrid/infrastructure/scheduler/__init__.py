from factgrid.infrastructure.scheduler.di import SchedulerProvider
from factgrid.infrastructure.scheduler.worker import ScheduleConfig, SchedulerPool

__all__ = ["ScheduleConfig", "SchedulerPool", "SchedulerProvider"]
