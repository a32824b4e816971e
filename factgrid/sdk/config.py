from pydantic import BaseModel, ConfigDict


class SourceConfig(BaseModel):
    """Base class for per-adapter settings found under ``sources.<slug>``."""

    model_config = ConfigDict(extra="forbid")
