"""US public debt to the penny from the Treasury Fiscal Data API."""

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.sdk import Category, SnapshotPayload, Source, get_json, parse
from sources.treasury.schema import DebtToPenny

DEBT_URL = "https://api.fiscaldata.treasury.gov/services/api/fiscal_service/v2/accounting/od/debt_to_penny"


def _trillions(amount: float) -> float:
    return round(amount / 1_000_000_000_000 * 10) / 10


class USNationalDebtSource(Source):
    slug = "us-national-debt"
    kind = SourceKind.DAILY

    async def fetch(self) -> SnapshotPayload:
        data = await get_json(
            self.client, DEBT_URL, source="US Treasury", params={"sort": "-record_date", "limit": 1}
        )
        latest = parse(DebtToPenny, data, source="US Treasury").data[0]
        return SnapshotPayload(
            unit_label="Trillion USD",
            dot_value=0.5,
            total=_trillions(latest.tot_pub_debt_out_amt),
            categories=(
                Category(key="public", label="Held by the Public", value=_trillions(latest.debt_held_public_amt)),
                Category(
                    key="intragov",
                    label="Intragovernmental Holdings",
                    value=_trillions(latest.intragov_hold_amt),
                ),
            ),
            notes=f"Official US debt to the penny as of {latest.record_date} via US Treasury API.",
        )
