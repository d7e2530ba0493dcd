"""Constants describing the Fintual real-asset endpoints and known funds."""

from attrs import define

BASE_URL = "https://fintual.cl/api/real_assets/"
DAYS_RESOURCE = "days"


@define(frozen=True)
class Fund:
    """A Fintual fund (real asset) and its display name."""

    asset_id: int
    name: str


# Series A of the four public Fintual funds.
FUNDS: dict[int, Fund] = {
    186: Fund(asset_id=186, name="Fondo Agresivo (Norris)"),
    187: Fund(asset_id=187, name="Fondo Moderado (Pit)"),
    188: Fund(asset_id=188, name="Fondo Conservador (Clooney)"),
    15077: Fund(asset_id=15077, name="Fondo Muy Conservador (Streep)"),
}

DEFAULT_FUND_ID = 186


def days_path(asset_id: int) -> str:
    """Return the path of the daily price resource, relative to :data:`BASE_URL`."""
    return f"{int(asset_id)}/{DAYS_RESOURCE}"


def is_valid_asset_id(asset_id: int) -> bool:
    """Return True when ``asset_id`` is one of the registered funds."""
    return asset_id in FUNDS


def get_fund_name(asset_id: int) -> str:
    """Return the display name of a fund, or a generic ``Fondo <id>`` label."""
    fund = FUNDS.get(asset_id)
    if fund is None:
        return f"Fondo {asset_id}"
    return fund.name


def get_fund(asset_id: int) -> Fund:
    """Return the registered fund, or an ad-hoc one for unknown ids."""
    return FUNDS.get(asset_id) or Fund(asset_id=asset_id, name=get_fund_name(asset_id))


def list_funds() -> list[Fund]:
    """Return the registered funds in registry order."""
    return list(FUNDS.values())


__all__ = [
    "BASE_URL",
    "DAYS_RESOURCE",
    "DEFAULT_FUND_ID",
    "FUNDS",
    "Fund",
    "days_path",
    "get_fund",
    "get_fund_name",
    "is_valid_asset_id",
    "list_funds",
]
