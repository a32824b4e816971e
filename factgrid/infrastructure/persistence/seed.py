"""Catalog of tracked datasets and the cards that display them."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncEngine

from factgrid.domain.dataset.model.value import RefreshRate
from factgrid.infrastructure.persistence.tables import cards_table, datasets_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedDataset:
    slug: str
    name: str
    refresh_rate: RefreshRate
    card_slug: str | None = None
    card_title: str | None = None


H, D, W = RefreshRate.HOURLY, RefreshRate.DAILY, RefreshRate.WEEKLY

CATALOG: tuple[SeedDataset, ...] = (
    SeedDataset("us-national-debt", "US National Debt", D, "us-national-debt-live", "The US National Debt"),
    SeedDataset("ethereum-price", "Ethereum Price", H, "ethereum-live", "Ethereum price, live"),
    SeedDataset("global-flights", "Global Flights Airborne", H, "flights-right-now", "Planes in the air, right now"),
    SeedDataset("global-earthquakes", "Global Earthquakes Today", H, "earthquakes-today", "Earthquakes in the last 24 hours"),
    SeedDataset("near-earth-asteroids", "Asteroids Passing Earth Today", D, "asteroids-today", "Asteroids passing Earth today"),
    SeedDataset("live-population", "Live Population Growth", H, "humanity-growth-today", "How much humanity grew today"),
    SeedDataset("ai-adoption", "AI Adoption", W, "ai-isnt-mainstream-yet", "Most humans have never used AI"),
    SeedDataset("internet-access", "Internet Access", W, "billions-still-offline", "Billions of people have never been online"),
    SeedDataset("smartphone-access", "Smartphone Access", W, "smartphone-divide", "The smartphone divide"),
    SeedDataset("co2-emissions", "CO₂ Emissions", W, "who-pollutes", "Just 3 countries emit over half the world's CO₂"),
    SeedDataset("renewable-energy", "Renewable Energy", W, "renewables-reality", "Where the world's electricity comes from"),
    SeedDataset("ev-adoption", "EV Adoption", W, "ev-tipping-point", "How many new cars are electric"),
    SeedDataset("wealth-inequality", "Global Wealth Distribution", W, "wealth-gap", "Who owns the world's wealth"),
    SeedDataset("military-spending", "Military Spending", W, "where-the-money-goes", "Where the world's military money goes"),
    SeedDataset("bitcoin-price", "Bitcoin Price", H, "bitcoin-live", "Bitcoin price, live"),
    SeedDataset("wikipedia-pageviews", "Wikipedia Pageviews", D, "wikipedia-today", "How many people read Wikipedia today"),
    SeedDataset("active-satellites", "Active Satellites in Orbit", W, "satellites-above", "Satellites orbiting Earth right now"),
    SeedDataset("cyberattacks-today", "Global Cyberattacks Today", D, "cyber-threats", "Cyberattacks detected today"),
    SeedDataset("temperature-anomaly", "Global Temperature Anomaly", W, "warming-world", "How much warmer Earth is than normal"),
    SeedDataset("deforestation", "Deforestation vs Reforestation", W, "disappearing-forests", "We lose 10 million hectares of forest every year"),
    SeedDataset("ocean-plastic", "Ocean Plastic Pollution", W, "plastic-ocean", "Plastic entering the ocean every year"),
    SeedDataset("trillion-dollar-club", "Trillion Dollar Club", H, "trillion-club", "The Trillion Dollar Club"),
    SeedDataset("sp500-mood", "S&P 500 Daily Mood", D, "market-mood", "How the S&P 500 felt today"),
    SeedDataset("food-waste", "Food Production vs Waste", W, "wasted-food", "One-third of all food is wasted"),
    SeedDataset("extreme-poverty", "Extreme Poverty", W, "poverty-line", "How many people live in extreme poverty"),
    SeedDataset("water-usage", "Global Water Usage", W, "water-world", "70% of all freshwater goes to agriculture"),
    SeedDataset("solar-activity-today", "Solar Activity Today", D),
    SeedDataset("global-ewaste", "Global E-waste", W),
    SeedDataset("global-land-use", "Global Land Use", W),
    SeedDataset("ships-at-sea", "Ships at Sea", W),
    SeedDataset("billionaires-vs-gdp", "Billionaires vs GDP", W),
    SeedDataset("generational-wealth", "Generational Wealth", W),
    SeedDataset("causes-of-mortality", "Causes of Mortality", W),
    SeedDataset("eradicated-diseases", "Eradicated Diseases", W),
    SeedDataset("data-creation", "Global Data Creation", W),
    SeedDataset("semiconductor-manufacturing", "Semiconductor Manufacturing", W),
)


async def seed_catalog(engine: AsyncEngine, catalog: tuple[SeedDataset, ...] = CATALOG) -> int:
    """Insert catalog datasets and cards that are not present yet. Idempotent.

    Returns:
        Number of datasets inserted.
    """
    now = datetime.now(UTC)
    inserted = 0
    async with engine.begin() as conn:
        existing = {
            row.slug: row.id
            for row in (await conn.execute(select(datasets_table.c.slug, datasets_table.c.id))).all()
        }
        existing_cards = set((await conn.execute(select(cards_table.c.slug))).scalars().all())

        for entry in catalog:
            dataset_id = existing.get(entry.slug)
            if dataset_id is None:
                dataset_id = str(uuid4())
                await conn.execute(
                    insert(datasets_table).values(
                        id=dataset_id,
                        slug=entry.slug,
                        name=entry.name,
                        refresh_rate=entry.refresh_rate.value,
                        created_at=now,
                    )
                )
                inserted += 1

            if entry.card_slug and entry.card_slug not in existing_cards:
                await conn.execute(
                    insert(cards_table).values(
                        id=str(uuid4()),
                        slug=entry.card_slug,
                        title=entry.card_title or entry.name,
                        dataset_id=dataset_id,
                        created_at=now,
                    )
                )

    logger.info("Seeded %d new dataset(s) (%d in catalog)", inserted, len(catalog))
    return inserted
