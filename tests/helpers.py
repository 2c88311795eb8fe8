"""Test doubles and payload builders."""

from datetime import date
from urllib.parse import unquote

import httpx

from investor_dashboard.data import Unavailable


TODAY = date(2025, 6, 15)


def fred_payload(*pairs: tuple[str, str]) -> dict:
    """FRED response body with observations most-recent-first, as FRED sends them."""
    rows = [
        {"realtime_start": "2025-06-15", "realtime_end": "2025-06-15", "date": d, "value": v}
        for d, v in sorted(pairs, reverse=True)
    ]
    return {"count": len(rows), "observations": rows}


def requested_series(request: httpx.Request) -> str:
    """FRED series id carried inside a proxied request URL."""
    decoded = unquote(str(request.url))
    return decoded.split("series_id=", 1)[1].split("&", 1)[0]


class OfflineSource:
    """Series source that never has live data."""

    def __init__(self) -> None:
        self.requested: list[str] = []

    async def fetch_series(self, series_id: str) -> Unavailable:
        self.requested.append(series_id)
        return Unavailable(series_id, "offline")
