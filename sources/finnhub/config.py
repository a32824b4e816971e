from factgrid.sdk import SourceConfig


class FinnhubConfig(SourceConfig):
    """Settings under ``sources.trillion-dollar-club``.

    Without an API key the adapter publishes labelled estimates instead of
    live market caps.
    """

    api_key: str | None = None
    # Companies below this market cap (trillions USD) are left out
    min_market_cap: float = 0.5
