"""Datasets with no public live feed, published as labelled report estimates.

Each payload names the report it comes from; the watchdog never probes
these, and refreshing them only confirms the stored snapshot.
"""

from typing import ClassVar

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.sdk import Category, SnapshotPayload, Source


def _payload(
    unit: str, dot: float, total: float, notes: str, *categories: tuple[str, str, float]
) -> SnapshotPayload:
    return SnapshotPayload(
        unit_label=unit,
        dot_value=dot,
        total=total,
        categories=tuple(Category(key=k, label=label, value=v) for k, label, v in categories),
        notes=notes,
    )


class EstimateSource(Source):
    kind = SourceKind.ESTIMATED
    payload: ClassVar[SnapshotPayload]

    async def fetch(self) -> SnapshotPayload:
        return self.payload


class CyberattacksTodaySource(EstimateSource):
    slug = "cyberattacks-today"
    payload = _payload(
        "attacks (thousands)",
        10,
        2200,
        "Estimated daily average from Kaspersky/CrowdStrike annual threat reports (2024). "
        "Not real-time; no free API exists for live cyberattack counts. ~2.2M+ attacks per day.",
        ("malware", "Malware/Ransomware", 800),
        ("phishing", "Phishing", 700),
        ("ddos", "DDoS", 400),
        ("other", "Other", 300),
    )


class DeforestationSource(EstimateSource):
    slug = "deforestation"
    payload = _payload(
        "million hectares/year",
        0.5,
        15,
        "FAO Global Forest Resources Assessment (2025). Net loss: ~5M ha/year. "
        "Tropical deforestation accounts for the majority.",
        ("loss", "Forest lost", 10),
        ("gain", "Forest gained (reforestation)", 5),
    )


class OceanPlasticSource(EstimateSource):
    slug = "ocean-plastic"
    payload = _payload(
        "million tonnes/year",
        0.2,
        11,
        "UNEP (2024). ~11M tonnes of plastic enter the ocean yearly. Only ~1% is recovered.",
        ("packaging", "Packaging", 4.4),
        ("textiles", "Textiles/Fibers", 2.2),
        ("fishing", "Fishing gear", 1.7),
        ("other", "Other plastics", 2.7),
    )


class SP500MoodSource(EstimateSource):
    slug = "sp500-mood"
    payload = _payload(
        "companies",
        5,
        500,
        "Estimated average daily distribution (not live). No free API exists for per-stock "
        "S&P 500 daily performance without an API key. ~55% of stocks close positive on an average day.",
        ("up", "Closed up ↑", 280),
        ("down", "Closed down ↓", 200),
        ("flat", "Flat (< ±0.1%)", 20),
    )


class FoodWasteSource(EstimateSource):
    slug = "food-waste"
    payload = _payload(
        "billion tonnes/year",
        0.05,
        6.0,
        "FAO/UNEP Food Waste Index 2024. ~6B tonnes produced, ~1/3 lost or wasted.",
        ("consumed", "Consumed", 4.0),
        ("lost_supply", "Lost in supply chain", 1.0),
        ("wasted", "Wasted by consumers", 1.0),
    )


class WaterUsageSource(EstimateSource):
    slug = "water-usage"
    payload = _payload(
        "% of freshwater withdrawal",
        1,
        100,
        "FAO AQUASTAT (2024). Global freshwater withdrawal: ~4,000 km³/year. Agriculture: 70%.",
        ("agriculture", "Agriculture", 70),
        ("industry", "Industry", 19),
        ("domestic", "Domestic/Municipal", 11),
    )


class GlobalEwasteSource(EstimateSource):
    slug = "global-ewaste"
    payload = _payload(
        "million tonnes/year",
        1,
        62,
        "Global E-waste Monitor (2024). 62 million tonnes generated annually. Only 22.3% is "
        "documented as formally collected and recycled.",
        ("unrecycled", "Unmanaged / Dumped", 48),
        ("recycled", "Properly Recycled", 14),
    )


class GlobalLandUseSource(EstimateSource):
    slug = "global-land-use"
    payload = _payload(
        "% of habitable land",
        1,
        100,
        "Our World in Data. Half of global habitable land is used for agriculture. Urban centers, "
        "despite housing over half the population, use just 1.5%.",
        ("agriculture", "Agriculture", 46),
        ("forests", "Forests", 38),
        ("shrub", "Shrubs / Grassland", 14),
        ("urban", "Urban / Built-up", 2),
    )


class ShipsAtSeaSource(EstimateSource):
    slug = "ships-at-sea"
    payload = _payload(
        "ships",
        200,
        50000,
        "MarineTraffic estimates roughly 50,000 to 60,000 merchant ships trading internationally "
        "at any given moment.",
        ("cargo", "Cargo / Freight", 35000),
        ("tankers", "Tankers", 10000),
        ("passenger", "Passenger / Other", 5000),
    )


class BillionairesVsGDPSource(EstimateSource):
    slug = "billionaires-vs-gdp"
    payload = _payload(
        "billion USD",
        10,
        1500,
        "Forbes Real-Time Billionaires. The top few individuals hold wealth surpassing the "
        "combined GDP of dozens of smaller developing nations.",
        ("musk", "Elon Musk", 250),
        ("arnault", "Bernard Arnault", 230),
        ("bezos", "Jeff Bezos", 190),
        ("zuckerberg", "Mark Zuckerberg", 160),
        ("gdp_nations", "Equivalent to GDP of bottom 50 nations", 670),
    )


class GenerationalWealthSource(EstimateSource):
    slug = "generational-wealth"
    payload = _payload(
        "% of US wealth",
        1,
        100,
        "Federal Reserve Board (2024). Boomers hold half of all US wealth. Millennials hold "
        "roughly 9% despite making up the largest workforce segment.",
        ("boomers", "Baby Boomers (~$75T)", 50),
        ("genx", "Generation X (~$40T)", 27),
        ("silent", "Silent Gen (~$18T)", 14),
        ("millennials", "Millennials (~$13T)", 9),
    )


class CausesOfMortalitySource(EstimateSource):
    slug = "causes-of-mortality"
    payload = _payload(
        "million deaths/year",
        0.5,
        61,
        "Our World in Data / WHO. Around 61 million people die each year. Cardiovascular disease "
        "remains the leading cause globally. (Numbers simplified).",
        ("cardio", "Cardiovascular diseases", 20),
        ("cancer", "Cancers", 10),
        ("respiratory", "Respiratory diseases", 4),
        ("digestive", "Digestive/Other NCDs", 15),
        ("infectious", "Infectious diseases & maternal", 8),
        ("injuries", "Injuries", 4),
    )


class EradicatedDiseasesSource(EstimateSource):
    slug = "eradicated-diseases"
    payload = _payload(
        "million lives saved",
        2,
        154,
        "WHO (2024 report): Global immunization efforts have saved an estimated 154 million lives "
        "over the last 50 years, primarily infants.",
        ("measles", "Measles", 94),
        ("polio", "Polio", 22),
        ("tetanus", "Neonatal tetanus", 15),
        ("other", "Other vaccines", 23),
    )


class DataCreationSource(EstimateSource):
    slug = "data-creation"
    payload = _payload(
        "Zettabytes (ZB)",
        1,
        147,
        "Statista (2024 estimate). 147 Zettabytes generated worldwide. 1 ZB = 1 billion Terabytes.",
        ("video", "Video streaming & media", 70),
        ("social", "Social & Communications", 30),
        ("enterp", "Enterprise/IoT/Cloud", 40),
        ("other", "Other", 7),
    )


class SemiconductorManufacturingSource(EstimateSource):
    slug = "semiconductor-manufacturing"
    payload = _payload(
        "% of advanced chips (<10nm)",
        1,
        100,
        "TrendForce. The global supply of the most advanced logic chips is heavily centralized, "
        "mostly manufactured in Taiwan.",
        ("tsmc", "Taiwan (TSMC)", 68),
        ("samsung", "South Korea (Samsung)", 17),
        ("intel", "USA (Intel)", 12),
        ("other", "Other", 3),
    )
