from factgrid.sdk import SourceConfig


class NasaConfig(SourceConfig):
    """Settings under ``sources.near-earth-asteroids``."""

    # DEMO_KEY is rate limited to a few dozen requests per hour
    api_key: str = "DEMO_KEY"
