"""Datasets derived from World Bank development indicators."""

import asyncio
from datetime import UTC, datetime, timedelta

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.domain.shared.error import MalformedResponseError
from factgrid.sdk import Category, SnapshotPayload, Source
from sources.worldbank.client import fetch_indicator, newest, require_newest

POPULATION = "SP.POP.TOTL"
PEOPLE_DOT = 40_000_000


def _round_to_100m(population: float) -> int:
    return round(population / 100_000_000) * 100_000_000


class MilitarySpendingSource(Source):
    slug = "military-spending"
    kind = SourceKind.ANNUAL

    indicator = "MS.MIL.XPND.CD"
    # display key -> (ISO3 code, label)
    spenders = {
        "us": ("USA", "United States"),
        "china": ("CHN", "China"),
        "russia": ("RUS", "Russia"),
        "india": ("IND", "India"),
    }

    async def fetch(self) -> SnapshotPayload:
        this_year = self.now().year
        codes = [code for code, _ in self.spenders.values()] + ["WLD"]
        entries = await fetch_indicator(
            self.client, self.indicator, codes, start=this_year - 3, end=this_year, per_page=100
        )

        by_country = {}
        for code in codes:
            entry = newest(e for e in entries if e.code == code)
            if entry is not None:
                by_country[code] = entry
        if not by_country:
            raise MalformedResponseError(f"World Bank returned no data for {self.indicator}")

        def billions(code: str) -> int:
            entry = by_country.get(code)
            return round(entry.value / 1_000_000_000) if entry is not None else 0

        spent = {key: billions(code) for key, (code, _) in self.spenders.items()}
        world = billions("WLD")
        rest = max(0, world - sum(spent.values()))
        anchor = by_country.get("USA") or by_country.get("WLD")
        year = anchor.year if anchor is not None else this_year - 1

        categories = [
            Category(key=key, label=label, value=spent[key])
            for key, (_, label) in self.spenders.items()
        ]
        categories.append(Category(key="rest", label="Everyone else", value=rest))
        return SnapshotPayload(
            unit_label="billion USD",
            dot_value=25,
            total=world or sum(spent.values()) + rest,
            categories=tuple(categories),
            notes=f"World Bank indicator {self.indicator} ({year}). Auto-refreshed weekly.",
        )


class InternetAccessSource(Source):
    slug = "internet-access"
    kind = SourceKind.ANNUAL

    async def fetch(self) -> SnapshotPayload:
        this_year = self.now().year
        usage, population = await asyncio.gather(
            fetch_indicator(self.client, "IT.NET.USER.ZS", ["WLD"], start=this_year - 3, end=this_year),
            fetch_indicator(self.client, POPULATION, ["WLD"], start=this_year - 3, end=this_year),
        )
        share = require_newest(usage, "IT.NET.USER.ZS")
        if not share.value:
            raise MalformedResponseError("World Bank IT.NET.USER.ZS: internet share is zero")
        people = require_newest(population, POPULATION).value

        online = round(people * share.value / 100)
        return SnapshotPayload(
            unit_label="people",
            dot_value=PEOPLE_DOT,
            total=_round_to_100m(people),
            categories=(
                Category(key="online", label="Online", value=online),
                Category(key="offline", label="Never been online", value=round(people - online)),
            ),
            notes=(
                f"World Bank IT.NET.USER.ZS ({share.year}). {round(share.value)}% of world "
                "population online. Auto-refreshed weekly."
            ),
        )


class SmartphoneAccessSource(Source):
    slug = "smartphone-access"
    kind = SourceKind.ANNUAL

    # Subscriptions per unique user, accounting for multiple SIMs
    UNIQUE_USER_RATIO = 0.72
    # Share of mobile users on a smartphone (GSMA)
    SMARTPHONE_RATIO = 0.81

    async def fetch(self) -> SnapshotPayload:
        this_year = self.now().year
        subscriptions, population = await asyncio.gather(
            fetch_indicator(self.client, "IT.CEL.SETS", ["WLD"], start=this_year - 3, end=this_year),
            fetch_indicator(self.client, POPULATION, ["WLD"], start=this_year - 3, end=this_year),
        )
        subs = require_newest(subscriptions, "IT.CEL.SETS")
        people = require_newest(population, POPULATION).value

        mobile_users = round(subs.value * self.UNIQUE_USER_RATIO)
        smartphone = round(mobile_users * self.SMARTPHONE_RATIO)
        return SnapshotPayload(
            unit_label="people",
            dot_value=PEOPLE_DOT,
            total=_round_to_100m(people),
            categories=(
                Category(key="smartphone", label="Smartphone owner", value=smartphone),
                Category(key="feature_phone", label="Feature phone only", value=mobile_users - smartphone),
                Category(key="no_phone", label="No mobile phone", value=round(people - mobile_users)),
            ),
            notes=f"World Bank IT.CEL.SETS ({subs.year}) + GSMA smartphone ratio. Auto-refreshed weekly.",
        )


class AIAdoptionSource(Source):
    """World Bank population split by published AI usage estimates.

    No live feed of AI usage exists; the user counts below come from
    Microsoft AI Economy Institute and DataReportal reports and are
    labelled as such in the notes.
    """

    slug = "ai-adoption"
    kind = SourceKind.ESTIMATED

    MONTHLY_USERS = 1_100_000_000
    WEEKLY_USERS = 300_000_000
    DAILY_USERS = 150_000_000

    async def fetch(self) -> SnapshotPayload:
        this_year = self.now().year
        population = require_newest(
            await fetch_indicator(
                self.client, POPULATION, ["WLD"], start=this_year - 2, end=this_year, per_page=5
            ),
            POPULATION,
        )
        total = _round_to_100m(population.value)
        return SnapshotPayload(
            unit_label="people",
            dot_value=PEOPLE_DOT,
            total=total,
            categories=(
                Category(key="never", label="Never used AI", value=total - self.MONTHLY_USERS),
                Category(
                    key="tried",
                    label="Tried it (monthly users)",
                    value=self.MONTHLY_USERS - self.WEEKLY_USERS,
                ),
                Category(
                    key="regular",
                    label="Weekly active user",
                    value=self.WEEKLY_USERS - self.DAILY_USERS,
                ),
                Category(key="daily", label="Daily user", value=self.DAILY_USERS),
            ),
            notes=(
                f"Population from World Bank ({population.year}). AI usage: estimates from "
                "Microsoft AI Economy Institute + DataReportal (survey-based, not a live API). "
                "Updated weekly."
            ),
        )


class ExtremePovertySource(Source):
    slug = "extreme-poverty"
    kind = SourceKind.ANNUAL

    # Latest published World Bank share, used while SI.POV.DDAY lags
    ESTIMATED_EXTREME_SHARE = 0.085
    # $2.15-$6.85/day
    MODERATE_SHARE = 0.25

    async def fetch(self) -> SnapshotPayload:
        this_year = self.now().year
        population, poverty = await asyncio.gather(
            fetch_indicator(self.client, POPULATION, ["WLD"], start=this_year - 5, end=this_year),
            fetch_indicator(self.client, "SI.POV.DDAY", ["WLD"], start=this_year - 5, end=this_year),
        )
        people = require_newest(population, POPULATION)
        total = _round_to_100m(people.value)

        headcount = newest(poverty)
        if headcount is not None and headcount.value:
            extreme = round(headcount.value / 100 * total)
            source = (
                f"World Bank SI.POV.DDAY ({headcount.year}): "
                f"{headcount.value:.1f}% of population"
            )
        else:
            extreme = round(self.ESTIMATED_EXTREME_SHARE * total)
            source = (
                "World Bank estimate (~8.5%), poverty API data lagging. "
                f"Population from {people.year}"
            )
        moderate = round(self.MODERATE_SHARE * total)

        return SnapshotPayload(
            unit_label="people",
            dot_value=PEOPLE_DOT,
            total=total,
            categories=(
                Category(key="extreme", label="Extreme poverty (<$2.15/day)", value=extreme),
                Category(key="moderate", label="Moderate poverty ($2.15-$6.85/day)", value=moderate),
                Category(key="above", label="Above poverty line", value=total - extreme - moderate),
            ),
            notes=f"{source}. Down from 1.9B in extreme poverty in 2000.",
        )


SECONDS_PER_YEAR = 365.25 * 24 * 60 * 60


class LivePopulationSource(Source):
    """Births and deaths so far today, from crude rates per 1,000 people."""

    slug = "live-population"
    kind = SourceKind.ESTIMATED

    async def fetch(self) -> SnapshotPayload:
        this_year = self.now().year
        start = this_year - 5
        population, births, deaths = await asyncio.gather(
            fetch_indicator(self.client, POPULATION, ["WLD"], start=start, end=this_year),
            fetch_indicator(self.client, "SP.DYN.CBRT.IN", ["WLD"], start=start, end=this_year),
            fetch_indicator(self.client, "SP.DYN.CDRT.IN", ["WLD"], start=start, end=this_year),
        )
        people = require_newest(population, POPULATION).value
        birth_rate = require_newest(births, "SP.DYN.CBRT.IN").value
        death_rate = require_newest(deaths, "SP.DYN.CDRT.IN").value

        now = self.now()
        midnight = datetime(now.year, now.month, now.day, tzinfo=UTC)
        seconds_today = (now - midnight) / timedelta(seconds=1)

        def so_far_today(rate_per_1000: float) -> int:
            per_second = people / 1000 * rate_per_1000 / SECONDS_PER_YEAR
            return round(seconds_today * per_second)

        born = so_far_today(birth_rate)
        died = so_far_today(death_rate)
        return SnapshotPayload(
            unit_label="people",
            dot_value=1000,
            total=max(born - died, 1),
            categories=(
                Category(key="births", label="Births today", value=born),
                Category(key="deaths", label="Deaths today", value=died),
            ),
            notes=(
                "Estimated changes today using active World Bank crude birth/death rates "
                "applied to global population."
            ),
        )
