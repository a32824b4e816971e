from factgrid.domain.dataset.model.value import SourceKind
from factgrid.sdk import Category, SnapshotPayload, Source

# UBS Global Wealth Report; WID has no stable global aggregate endpoint for these shares
REPORT_YEAR = 2024


class WealthInequalitySource(Source):
    slug = "wealth-inequality"
    kind = SourceKind.ANNUAL

    async def fetch(self) -> SnapshotPayload:
        return SnapshotPayload(
            unit_label="% of global wealth",
            dot_value=1,
            total=100,
            categories=(
                Category(key="top_1", label="Top 1%", value=43),
                Category(key="next_9", label="Next 9% (top 2-10%)", value=33),
                Category(key="middle_40", label="Middle 40%", value=22),
                Category(key="bottom_50", label="Bottom 50%", value=2),
            ),
            notes=(
                f"Estimates based on the UBS Global Wealth Report ({REPORT_YEAR}). "
                "No real-time API exists for this metric."
            ),
        )
