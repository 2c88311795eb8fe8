"""Configuration settings for the dashboard."""

from dataclasses import dataclass, field
import os

from dotenv import load_dotenv


load_dotenv()


# FRED series tracked by the dashboard
FRED_SERIES: dict[str, str] = {
    "SP500": "S&P 500 Index",
    "NASDAQCOM": "NASDAQ Composite Index",
    "DGS10": "10-Year Treasury Yield",
    "M2SL": "M2 Money Stock",
}

# Seeded into an empty watchlist on the first refresh
DEFAULT_WATCHLIST: tuple[str, ...] = ("AAPL", "NVDA", "TSLA")

# Initial range window per chart
DEFAULT_RANGES: dict[str, str] = {
    "sp500": "1Y",
    "nasdaq": "1Y",
    "treasury_10y": "5Y",
    "m2_supply": "10Y",
}

# URL-rewriting proxies, tried in order. {url} is the percent-encoded FRED URL.
PROXY_URLS: tuple[str, ...] = (
    "https://corsproxy.io/?{url}",
    "https://api.allorigins.win/raw?url={url}",
)


def _env_seed() -> int | None:
    raw = os.getenv("DASHBOARD_SEED", "").strip()
    return int(raw) if raw else None


@dataclass
class Settings:
    """Application settings."""

    fred_api_key: str = field(default_factory=lambda: os.getenv("FRED_API_KEY", ""))
    gemini_api_key: str = field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")
    )
    gemini_model: str = field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    )
    proxy_urls: tuple[str, ...] = PROXY_URLS
    request_timeout: float = 30.0
    observation_limit: int = 3000
    random_seed: int | None = field(default_factory=_env_seed)

    def has_fred_key(self) -> bool:
        """Check if a FRED API key is configured."""
        return bool(self.fred_api_key)

    def has_gemini_key(self) -> bool:
        """Check if a Gemini API key is configured."""
        return bool(self.gemini_api_key)
