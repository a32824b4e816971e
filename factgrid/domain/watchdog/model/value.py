from datetime import datetime

from factgrid.domain.shared.model.value import ValueObject


class Detection(ValueObject):
    """Outcome of one detection rule."""

    changed: bool
    detected_year: int | None = None
    method: str = ""


class WatchdogResult(ValueObject):
    """Ephemeral outcome of one probe run. Never persisted."""

    slug: str
    changed: bool
    previous_year: int | None = None
    detected_year: int | None = None
    method: str
    checked_at: datetime
    error: str | None = None

    @property
    def actionable(self) -> bool:
        return self.changed and self.error is None


class NewData(ValueObject):
    slug: str
    previous_year: int | None
    detected_year: int | None
    method: str


class WatchdogSummary(ValueObject):
    total: int
    changed: int
    errors: int
    checked_at: datetime
