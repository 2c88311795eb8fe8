"""Streamlit dashboard for macro and watchlist visualization.

Reads finished series from the MarketStateStore and renders them:
- Watchlist: synthetic quote cards with 30-day sparklines
- Macro: S&P 500 / NASDAQ with moving averages, 10Y yield, M2 change
- AI analysis: Gemini commentary on the current snapshot
"""

import asyncio
import logging

import plotly.graph_objects as go
import streamlit as st

from investor_dashboard.analysis import MarketAnalyst
from investor_dashboard.config import Settings
from investor_dashboard.data import FredFetcher, SyntheticGenerator
from investor_dashboard.models import MarketState, StockDetail, TimeRange
from investor_dashboard.state import MarketStateStore


logger = logging.getLogger(__name__)


SMA_STYLES = {
    "sma20": ("#f472b6", "20일 이평"),
    "sma60": ("#fcd34d", "60일 이평"),
    "sma120": ("#a78bfa", "120일 이평"),
}

CHART_LAYOUT = dict(
    margin=dict(l=0, r=0, t=30, b=0),
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    xaxis=dict(showgrid=False, tickfont=dict(color="#64748b", size=10)),
    yaxis=dict(showgrid=True, gridcolor="#1e293b", tickfont=dict(color="#64748b", size=10)),
    legend=dict(orientation="h", yanchor="bottom", y=1.02, x=0, font=dict(size=10, color="#94a3b8")),
    hovermode="x unified",
)


def get_store() -> MarketStateStore:
    """Session-scoped store, refreshed once on first load."""
    if "store" not in st.session_state:
        settings = Settings()
        store = MarketStateStore(
            source=FredFetcher(settings),
            generator=SyntheticGenerator(settings.random_seed),
        )
        asyncio.run(_refresh(store))
        st.session_state.store = store
    return st.session_state.store


async def _refresh(store: MarketStateStore) -> None:
    # A fresh event loop per rerun, so the HTTP client cannot outlive it
    try:
        await store.refresh()
    finally:
        await store.source.close()


# =============================================================================
# HEADER & WATCHLIST
# =============================================================================

def render_header(state: MarketState) -> None:
    """Title row with live/simulated data badge."""
    all_live = state.sources.all_live
    color = "#10b981" if all_live else "#f59e0b"
    label = "Full FRED Live Data Active" if all_live else "Partial Live / Simulation Active"

    st.markdown(
        f"""<div style="padding: 0.5rem 0 1rem 0; border-bottom: 1px solid #334155; margin-bottom: 1rem;">
            <div style="color: {color}; font-size: 0.7rem; font-weight: 700; text-transform: uppercase; letter-spacing: 0.1em;">
                ● {label}
            </div>
            <h1 style="margin: 0; font-size: 1.8rem; color: #f1f5f9;">Investor Pro Dashboard</h1>
            <div style="color: #64748b; font-size: 0.8rem; margin-top: 0.25rem;">
                FRED(연준) 공식 실시간 데이터를 기반으로 거시 경제 추세 분석
            </div>
        </div>""",
        unsafe_allow_html=True,
    )


def render_stock_card(stock: StockDetail, store: MarketStateStore) -> None:
    """Quote, fundamentals and sparkline for one ticker."""
    color = "#10b981" if stock.change >= 0 else "#ef4444"
    sign = "+" if stock.change >= 0 else ""

    st.markdown(
        f"""<div style="background: #1e293b; border: 1px solid #334155; border-radius: 8px; padding: 1rem;">
            <div style="display: flex; justify-content: space-between;">
                <div>
                    <div style="color: #f1f5f9; font-weight: 700; font-size: 1.1rem;">{stock.symbol}</div>
                    <div style="color: #64748b; font-size: 0.7rem;">{stock.name}</div>
                </div>
                <div style="text-align: right;">
                    <div style="color: #f1f5f9; font-family: 'SF Mono', monospace; font-size: 1.1rem;">${stock.price:,.2f}</div>
                    <div style="color: {color}; font-size: 0.8rem;">{sign}{stock.change:.2f} ({sign}{stock.change_percent:.2f}%)</div>
                </div>
            </div>
            <div style="display: flex; gap: 1rem; color: #94a3b8; font-size: 0.75rem; margin-top: 0.5rem;">
                <span>PER {stock.per:.2f}</span><span>PBR {stock.pbr:.2f}</span><span>배당 {stock.dividend_yield:.2f}%</span>
            </div>
        </div>""",
        unsafe_allow_html=True,
    )

    fig = go.Figure(go.Scatter(
        x=[p.date for p in stock.history], y=[p.value for p in stock.history],
        mode="lines", line=dict(color=color, width=2),
        hovertemplate="%{x}: $%{y:.2f}<extra></extra>",
    ))
    fig.update_layout(**CHART_LAYOUT, height=120, showlegend=False)
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})

    if st.button("삭제", key=f"remove_{stock.symbol}"):
        store.remove_symbol(stock.symbol)
        st.rerun()


def render_watchlist(store: MarketStateStore) -> None:
    """Add-ticker form and a grid of stock cards."""
    st.subheader("Watchlist")

    with st.form("add_symbol", clear_on_submit=True):
        col_input, col_submit = st.columns([4, 1])
        with col_input:
            symbol = st.text_input(
                "Ticker", placeholder="Ticker 추가 (예: NVDA)", label_visibility="collapsed"
            )
        with col_submit:
            submitted = st.form_submit_button("추가")
    if submitted and symbol:
        store.add_symbol(symbol)
        st.rerun()

    watchlist = store.state.watchlist
    for row_start in range(0, len(watchlist), 3):
        columns = st.columns(3)
        for column, stock in zip(columns, watchlist[row_start:row_start + 3]):
            with column:
                render_stock_card(stock, store)


# =============================================================================
# MACRO CHARTS
# =============================================================================

def render_range_selector(store: MarketStateStore, key: str) -> TimeRange:
    """Horizontal 1Y/5Y/10Y toggle bound to one chart."""
    options = [r.value for r in TimeRange]
    selected = st.radio(
        "Range",
        options=options,
        index=options.index(store.ranges[key].value),
        horizontal=True,
        key=f"range_{key}",
        label_visibility="collapsed",
    )
    store.set_range(key, selected)
    return store.ranges[key]


def render_index_chart(store: MarketStateStore, key: str, title: str, color: str) -> None:
    """Index level with 20/60/120-day moving averages."""
    time_range = render_range_selector(store, key)
    points = store.series(key)

    fig = go.Figure()
    dates = [p.date for p in points]
    fig.add_trace(go.Scatter(
        x=dates, y=[p.value for p in points],
        mode="lines", line=dict(color=color, width=2), name="현재가",
    ))
    for field_name, (sma_color, label) in SMA_STYLES.items():
        fig.add_trace(go.Scatter(
            x=dates, y=[getattr(p, field_name) for p in points],
            mode="lines", line=dict(color=sma_color, width=1), name=label,
        ))
    fig.update_layout(
        **CHART_LAYOUT, height=420,
        title=dict(text=f"{title} ({time_range.value})", font=dict(size=13, color="#94a3b8"), x=0),
    )
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})
    st.caption("이동평균선: 20일(분홍), 60일(노랑), 120일(보라)")


def render_treasury_chart(store: MarketStateStore) -> None:
    """10-year yield as a filled area."""
    time_range = render_range_selector(store, "treasury_10y")
    points = store.series("treasury_10y")

    fig = go.Figure(go.Scatter(
        x=[p.date for p in points], y=[p.value for p in points],
        mode="lines", line=dict(color="#f43f5e", width=2),
        fill="tozeroy", fillcolor="rgba(244, 63, 94, 0.15)",
        name="10Y Yield", hovertemplate="%{y:.2f}%<extra></extra>",
    ))
    fig.update_layout(
        **CHART_LAYOUT, height=380, showlegend=False,
        title=dict(text=f"US 10-Year Treasury Yield ({time_range.value})", font=dict(size=13, color="#94a3b8"), x=0),
    )
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})
    st.caption("거시 경제의 벤치마크: 장기 국채 수익률 추이 (%)")


def render_m2_chart(store: MarketStateStore) -> None:
    """Monthly M2 change as bars, green for growth and red for contraction."""
    time_range = render_range_selector(store, "m2_supply")
    points = store.series("m2_supply")

    fig = go.Figure(go.Bar(
        x=[p.date for p in points], y=[p.value for p in points],
        marker_color=["#10b981" if p.value >= 0 else "#ef4444" for p in points],
        name="M2 Change", hovertemplate="$%{y:.2f}B<extra></extra>",
    ))
    fig.update_layout(
        **CHART_LAYOUT, height=380, showlegend=False,
        title=dict(text=f"M2 Money Supply Monthly Change ({time_range.value})", font=dict(size=13, color="#94a3b8"), x=0),
    )
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})
    st.caption("통화량 월간 증감 (십억 달러)")


# =============================================================================
# AI ANALYSIS
# =============================================================================

def render_analysis(store: MarketStateStore) -> None:
    """Button-triggered Gemini commentary on the current snapshot."""
    st.subheader("AI Market Analysis")

    if st.button("AI 분석 실행", disabled=store.state.loading):
        with st.spinner("Analyzing..."):
            analyst = MarketAnalyst()
            st.session_state.analysis = asyncio.run(analyst.analyze_state(store.state))

    analysis = st.session_state.get("analysis")
    if analysis:
        st.markdown(analysis)


# =============================================================================
# MAIN APP
# =============================================================================

def main() -> None:
    """Main dashboard entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    st.set_page_config(
        page_title="Investor Pro Dashboard",
        page_icon="",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    st.markdown(
        """
        <style>
            .stApp { background-color: #0f172a; }
            .stMarkdown, .stText, p, span, label { color: #e2e8f0; }
            h1, h2, h3, h4 { color: #f1f5f9 !important; font-weight: 600 !important; }
            #MainMenu, footer, header { visibility: hidden; }
        </style>
        """,
        unsafe_allow_html=True,
    )

    with st.spinner("FRED Real-time Market Data Loading..."):
        store = get_store()

    render_header(store.state)

    if st.button("데이터 동기화"):
        with st.spinner("Refreshing..."):
            asyncio.run(_refresh(store))
        st.rerun()

    render_watchlist(store)

    st.subheader("Macro Indicators")
    col1, col2 = st.columns(2)
    with col1:
        render_index_chart(store, "sp500", "S&P 500 Index", "#38bdf8")
    with col2:
        render_index_chart(store, "nasdaq", "NASDAQ Composite", "#2dd4bf")

    col3, col4 = st.columns(2)
    with col3:
        render_treasury_chart(store)
    with col4:
        render_m2_chart(store)

    render_analysis(store)


if __name__ == "__main__":
    main()
