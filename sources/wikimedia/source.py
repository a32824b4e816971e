"""English Wikipedia daily pageviews from the Wikimedia REST API."""

import asyncio
import logging
from datetime import date, timedelta

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.domain.shared.error import MalformedResponseError, UpstreamUnavailableError
from factgrid.sdk import Category, SnapshotPayload, Source, get_json, parse
from sources.wikimedia.schema import PageviewAggregate

logger = logging.getLogger(__name__)

AGGREGATE_URL = "https://wikimedia.org/api/rest_v1/metrics/pageviews/aggregate/en.wikipedia/{access}/user/daily/{day}/{day}"

# Wikimedia never has today's numbers; yesterday is usually ready, else the day before
DAYS_BACK = (1, 2)

# access type -> (category key, label)
ACCESS_TYPES = {
    "desktop": ("desktop", "Desktop"),
    "mobile-web": ("mobile_web", "Mobile web"),
    "mobile-app": ("mobile_app", "Mobile app"),
}


def _stamp(day: date) -> str:
    return day.strftime("%Y%m%d") + "00"


class WikipediaPageviewsSource(Source):
    slug = "wikipedia-pageviews"
    kind = SourceKind.DAILY

    async def _views(self, access: str, day: date) -> int:
        data = await get_json(
            self.client,
            AGGREGATE_URL.format(access=access, day=_stamp(day)),
            source="Wikimedia",
        )
        return parse(PageviewAggregate, data, source="Wikimedia").views

    async def _latest_day(self) -> date:
        today = self.now().date()
        for days_back in DAYS_BACK:
            day = today - timedelta(days=days_back)
            try:
                await self._views("all-access", day)
                return day
            except (UpstreamUnavailableError, MalformedResponseError) as e:
                logger.debug("No pageviews for %s yet: %s", day, e.message)
        raise UpstreamUnavailableError("Wikimedia: no pageview data for recent dates")

    async def fetch(self) -> SnapshotPayload:
        day = await self._latest_day()
        views = await asyncio.gather(*(self._views(access, day) for access in ACCESS_TYPES))
        total = sum(views)
        if total == 0:
            raise MalformedResponseError(f"Wikimedia: per-access pageviews are all zero for {day}")

        return SnapshotPayload(
            unit_label="pageviews",
            dot_value=max(1_000_000, round(total / 50 / 1_000_000) * 1_000_000),
            total=total,
            categories=tuple(
                Category(key=key, label=label, value=value)
                for (key, label), value in zip(ACCESS_TYPES.values(), views, strict=True)
            ),
            notes=f"English Wikipedia pageviews for {day.isoformat()} via Wikimedia REST API.",
        )
