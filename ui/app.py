import sys
from pathlib import Path

import pandas as pd
import plotly.express as px
import streamlit as st

# ------------------------------------------------------------------
# Local imports (reuse the API layer code without the HTTP hop)
# ------------------------------------------------------------------
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from pipeline_forecast.core.config import get_settings  # type: ignore
from pipeline_forecast.main import build_forecast_cache  # type: ignore


# ------------------------------------------------------------------
# Config / constants
# ------------------------------------------------------------------
APP_TITLE = "Pipeline Forecast"
SERIES_LABELS = {"revenue": "Revenue", "orders": "Orders"}
COLORS = {"Actual": "#111827", "Forecast": "#2563eb"}


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------
@st.cache_resource(show_spinner=False)
def forecast_cache():
    # one cache per Streamlit server process, same TTL as the API
    return build_forecast_cache(get_settings())


def load_payload():
    return forecast_cache().get_forecast()


def fmt_money(value: float) -> str:
    return f"${value:,.0f}"


def fmt_pct(value: float) -> str:
    return f"{value:+.1f}%"


def kpi_row(label, value, delta=None, help_text=""):
    st.metric(label, value, delta=delta, help=help_text or None)


def build_frames(payload):
    history = pd.DataFrame([p.model_dump() for p in payload.history])
    forecast = pd.DataFrame([p.model_dump() for p in payload.forecast])
    for df in (history, forecast):
        if not df.empty:
            df["date"] = pd.to_datetime(df["date"])
    return history, forecast


def render_series(history: pd.DataFrame, forecast: pd.DataFrame, column: str, lookback_days: int):
    label = SERIES_LABELS[column]
    actual = history.tail(lookback_days)[["date", column]].assign(Series="Actual")
    projected = forecast[["date", column]].assign(Series="Forecast")
    view = pd.concat([actual, projected], ignore_index=True)

    fig = px.line(
        view,
        x="date",
        y=column,
        color="Series",
        title=f"{label} - actual vs forecast",
        color_discrete_map=COLORS,
    )
    fig.add_scatter(
        x=forecast["date"], y=forecast[f"{column}_upper"],
        mode="lines", line=dict(width=0), showlegend=False, hoverinfo="skip",
    )
    fig.add_scatter(
        x=forecast["date"], y=forecast[f"{column}_lower"],
        mode="lines", line=dict(width=0), fill="tonexty",
        fillcolor="rgba(37, 99, 235, 0.15)", name="80% band",
    )
    if not history.empty:
        fig.add_vline(x=history["date"].iloc[-1], line_dash="dash", line_color="#94a3b8")
    fig.update_layout(legend_title_text="", margin=dict(l=0, r=0, t=30, b=0))
    st.plotly_chart(fig, use_container_width=True)


# ------------------------------------------------------------------
# Page
# ------------------------------------------------------------------
st.set_page_config(page_title=APP_TITLE, layout="wide")
st.title(APP_TITLE)

settings = get_settings()
st.caption(
    f"Next {settings.forecast_days} days from up to {settings.history_window_days} days of order history, "
    f"{settings.rolling_window}-day smoothing, weekday x month seasonality."
)

try:
    payload = load_payload()
except Exception as e:  # surfaced to the user, nothing is cached on failure
    st.error(f"Failed to fetch pipeline forecast: {e}")
    st.stop()

if payload.history_days == 0:
    st.info("No qualifying orders in the history window.")
    st.stop()

summary = payload.summary
c1, c2, c3, c4 = st.columns(4)
with c1:
    kpi_row("Revenue forecast", fmt_money(summary.revenue_forecast), fmt_pct(summary.revenue_growth_pct),
            "Sum of projected daily revenue over the horizon")
with c2:
    kpi_row("Revenue last quarter", fmt_money(summary.revenue_last_quarter))
with c3:
    kpi_row("Orders forecast", f"{summary.orders_forecast:,.0f}", fmt_pct(summary.orders_growth_pct))
with c4:
    kpi_row("Orders last quarter", f"{summary.orders_last_quarter:,.0f}")

history, forecast = build_frames(payload)
max_days = max(payload.history_days, 14)
lookback = st.slider("History shown (days)", min_value=7, max_value=max_days, value=min(180, max_days), step=7)

for column in ("revenue", "orders"):
    render_series(history, forecast, column, lookback)

with st.expander("Forecast table"):
    st.dataframe(
        forecast.style.format({
            "revenue": "{:,.0f}", "revenue_lower": "{:,.0f}", "revenue_upper": "{:,.0f}",
            "orders": "{:,.1f}", "orders_lower": "{:,.1f}", "orders_upper": "{:,.1f}",
        }),
        use_container_width=True,
    )

st.caption(f"Generated {payload.generated_at:%Y-%m-%d %H:%M} UTC")
