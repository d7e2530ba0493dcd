"""Assemble normalized fund histories from the Fintual API."""

from collections.abc import Iterable

import structlog
from attrs import define, field

from .client import FintualHttpClient
from .endpoints import FUNDS, get_fund
from .models import FundHistory
from .parser import normalize_records

logger = structlog.get_logger(__name__)


@define(slots=True)
class FundHistoryBuilder:
    """Coordinate retrieval and normalization of daily fund prices."""

    client: FintualHttpClient = field(factory=FintualHttpClient)

    def load_fund(self, asset_id: int) -> FundHistory:
        """Fetch the daily prices of one fund and normalize them."""
        fund = get_fund(asset_id)
        log = logger.bind(asset_id=asset_id, fund=fund.name)
        log.info("builder.load_start")
        raw_days = self.client.get_days(asset_id)
        records = normalize_records(raw_days)
        history = FundHistory(fund=fund, records=records, rejected=len(raw_days) - len(records))
        log.info("builder.load_complete", records=len(records), rejected=history.rejected)
        return history

    def load_all_funds(self, asset_ids: Iterable[int] | None = None) -> list[FundHistory]:
        """Load every registered fund, or the requested subset, in order."""
        ids = list(asset_ids) if asset_ids is not None else list(FUNDS)
        return [self.load_fund(asset_id) for asset_id in ids]

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()
        logger.debug("builder.client_closed")


__all__ = ["FundHistoryBuilder"]
