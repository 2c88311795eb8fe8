"""FRED API data fetcher with proxy fallback."""

import asyncio
import logging
from dataclasses import dataclass
from urllib.parse import quote, urlencode

import httpx

from investor_dashboard.config import Settings, FRED_SERIES
from investor_dashboard.data.normalize import normalize_observations
from investor_dashboard.errors import FetchFailure
from investor_dashboard.models import Observation


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Live:
    """Series retrieved from FRED."""

    series_id: str
    observations: list[Observation]
    tier: int = 0  # index of the access path that answered


@dataclass(frozen=True)
class Unavailable:
    """Every access path failed; callers substitute synthetic data."""

    series_id: str
    reason: str


SeriesResult = Live | Unavailable


class FredFetcher:
    """Fetches FRED observations through a chain of URL-rewriting proxies."""

    BASE_URL = "https://api.stlouisfed.org/fred"

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._client = client

        if not self.settings.has_fred_key():
            logger.warning("FRED_API_KEY not set, live series will be unavailable")

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.request_timeout)
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FredFetcher":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    def observations_url(self, series_id: str) -> str:
        """Direct FRED URL for a series, most recent observations first."""
        params = {
            "series_id": series_id,
            "api_key": self.settings.fred_api_key,
            "file_type": "json",
            "sort_order": "desc",
            "limit": str(self.settings.observation_limit),
        }
        return f"{self.BASE_URL}/series/observations?{urlencode(params)}"

    def access_paths(self, series_id: str) -> list[str]:
        """Proxied URLs for a series, in the order they are tried."""
        encoded = quote(self.observations_url(series_id), safe="")
        return [template.format(url=encoded) for template in self.settings.proxy_urls]

    async def _attempt(self, series_id: str, url: str) -> list[Observation]:
        """
        Fetch and normalize through one access path.

        Raises:
            FetchFailure: transport error, bad status, bad payload or no usable rows
        """
        try:
            response = await self.client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise FetchFailure(series_id, f"status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchFailure(series_id, f"transport error: {e}") from e
        except ValueError as e:
            raise FetchFailure(series_id, "malformed JSON") from e

        if not isinstance(data, dict) or not isinstance(data.get("observations"), list):
            raise FetchFailure(series_id, "no observations found")

        try:
            observations = normalize_observations(
                obs for obs in data["observations"] if isinstance(obs, dict)
            )
        except (TypeError, ValueError) as e:
            raise FetchFailure(series_id, f"malformed observations: {e}") from e
        if not observations:
            raise FetchFailure(series_id, "no usable observations")

        return observations

    async def fetch_series(self, series_id: str) -> SeriesResult:
        """
        Fetch a series, falling through each access path in turn.

        Never raises for remote failures; returns Unavailable instead.
        """
        if not self.settings.has_fred_key():
            return Unavailable(series_id, "FRED_API_KEY not set")

        logger.info(f"Fetching {series_id}...")
        reason = "no access paths configured"

        for tier, url in enumerate(self.access_paths(series_id)):
            try:
                observations = await self._attempt(series_id, url)
            except FetchFailure as e:
                reason = e.reason
                logger.warning(f"  Access path {tier + 1} failed for {series_id}: {reason}")
                continue

            logger.info(f"  {series_id}: {len(observations)} observations via path {tier + 1}")
            return Live(series_id, observations, tier)

        logger.error(f"All access paths failed for {series_id}: {reason}")
        return Unavailable(series_id, reason)


async def _fetch_and_report(series_ids: list[str]) -> int:
    """Fetch series concurrently and print a summary. Returns the failure count."""
    async with FredFetcher() as fetcher:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(fetcher.fetch_series(sid)) for sid in series_ids]

    failures = 0
    print("\nFetch results:")
    print("-" * 70)
    for task in tasks:
        result = task.result()
        title = FRED_SERIES.get(result.series_id, "")
        if isinstance(result, Live):
            last = result.observations[-1]
            print(
                f"{result.series_id:10} | {len(result.observations):6} obs | "
                f"Last: {last.date} = {last.value:<10g} | path {result.tier + 1} | {title}"
            )
        else:
            failures += 1
            print(f"{result.series_id:10} | unavailable ({result.reason}) | {title}")
    return failures


def main() -> None:
    """CLI entry point for fetching data."""
    import argparse
    import sys

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Fetch FRED market data")
    parser.add_argument(
        "--series",
        type=str,
        help="Fetch specific series only",
    )
    args = parser.parse_args()

    if args.series:
        if args.series not in FRED_SERIES:
            print(f"Unknown series: {args.series}")
            print(f"Available: {', '.join(FRED_SERIES.keys())}")
            sys.exit(1)
        series_ids = [args.series]
    else:
        series_ids = list(FRED_SERIES)

    failures = asyncio.run(_fetch_and_report(series_ids))
    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
