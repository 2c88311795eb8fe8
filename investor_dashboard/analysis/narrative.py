"""AI market commentary via the Gemini API.

The model receives one free-text context line and returns prose that the
dashboard shows verbatim. Any failure is reported as a fixed Korean message
rather than an exception.
"""

import logging

from google import genai
from google.genai import types

from investor_dashboard.config import Settings
from investor_dashboard.errors import AIAnalysisFailure
from investor_dashboard.models import MarketState


logger = logging.getLogger(__name__)


ANALYSIS_FAILURE_MESSAGE = (
    "시장 데이터를 분석하는 동안 오류가 발생했습니다. API 키와 네트워크 연결을 확인해 주세요."
)
EMPTY_ANALYSIS_MESSAGE = "분석 결과를 가져올 수 없습니다."

PROMPT_TEMPLATE = """You are a world-class financial quantitative analyst.
Analyze the following market data context: {context}

Task:
1. Briefly state the current macro environment (Liquidity vs Yields).
2. Analyze how these macro trends specifically impact the growth or value stocks listed in the user's watchlist.
3. Provide a forward-looking risk assessment.

Format: Use professional Korean language. Keep it insightful but extremely concise. Use clear section headers.
Do not include technical jargon without context."""


def _latest(points: list) -> str:
    return f"{points[-1].value}" if points else "N/A"


def build_analysis_context(state: MarketState) -> str:
    """One-line summary of the latest macro values and watchlist prices."""
    macro = (
        f"S&P500:{_latest(state.sp500)}, NASDAQ:{_latest(state.nasdaq)}, "
        f"10Y Yield: {_latest(state.treasury_10y)}%, M2 Change: ${_latest(state.m2_supply)}B."
    )
    watchlist = ", ".join(f"{stock.symbol} (${stock.price})" for stock in state.watchlist)
    return f"{macro} Watchlist: {watchlist}."


class MarketAnalyst:
    """Generates narrative analysis for a market snapshot."""

    def __init__(self, settings: Settings | None = None, client: genai.Client | None = None) -> None:
        self.settings = settings or Settings()
        self._client = client

    @property
    def client(self) -> genai.Client:
        """Lazy-initialize Gemini client."""
        if self._client is None:
            if not self.settings.has_gemini_key():
                raise AIAnalysisFailure("GEMINI_API_KEY not set")
            self._client = genai.Client(api_key=self.settings.gemini_api_key)
        return self._client

    async def _generate(self, context: str) -> str:
        try:
            response = await self.client.aio.models.generate_content(
                model=self.settings.gemini_model,
                contents=PROMPT_TEMPLATE.format(context=context),
                config=types.GenerateContentConfig(temperature=0.6, top_p=0.9),
            )
        except AIAnalysisFailure:
            raise
        except Exception as e:
            raise AIAnalysisFailure(str(e)) from e
        return response.text or ""

    async def analyze(self, context: str) -> str:
        """Prose analysis of ``context``, or a fixed failure message."""
        try:
            text = await self._generate(context)
        except AIAnalysisFailure as e:
            logger.error(f"Gemini analysis failed: {e}")
            return ANALYSIS_FAILURE_MESSAGE
        return text or EMPTY_ANALYSIS_MESSAGE

    async def analyze_state(self, state: MarketState) -> str | None:
        """Analyze a snapshot. Returns None while the state is still loading."""
        if state.loading:
            return None
        return await self.analyze(build_analysis_context(state))
