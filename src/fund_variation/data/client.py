"""HTTP client for the Fintual real-asset API."""

from typing import Any
from urllib.parse import urljoin

import requests
import structlog
from attrs import define, field

from .endpoints import BASE_URL, days_path
from .parser import parse_days_payload

logger = structlog.get_logger(__name__)


@define(slots=True)
class FintualHttpClient:
    """Thin HTTP wrapper around the public ``real_assets`` endpoints."""

    base_url: str = BASE_URL
    timeout: float = 30.0
    session: requests.Session = field(factory=requests.Session)
    headers: dict[str, str] = field(
        factory=lambda: {
            "User-Agent": "fund-variation/0.1",
            "Accept": "application/json",
        },
    )

    def get_json(self, path: str) -> Any:
        """Fetch a resource relative to ``base_url`` and return its decoded JSON body."""
        url = urljoin(self.base_url, path)
        log = logger.bind(path=path, url=url)
        log.debug("http.fetch_start", timeout=self.timeout)
        try:
            response = self.session.get(url, timeout=self.timeout, headers=self.headers)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            log.error("http.fetch_failed", status=status, exc_info=True)
            raise
        try:
            payload = response.json()
        except ValueError as exc:
            log.error("http.invalid_json", bytes=len(response.content))
            raise ValueError(f"Response from {url} is not valid JSON.") from exc
        log.debug("http.fetch_success", bytes=len(response.content))
        return payload

    def get_days(self, asset_id: int) -> list[Any]:
        """Return the raw daily price records of a fund."""
        payload = self.get_json(days_path(asset_id))
        days = parse_days_payload(payload)
        logger.debug("http.days_received", asset_id=asset_id, count=len(days))
        return days

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()
        logger.debug("http.session_closed")


__all__ = ["FintualHttpClient"]
