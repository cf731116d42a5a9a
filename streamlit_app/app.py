from __future__ import annotations

import pandas as pd
import streamlit as st

from warehouse_heartbeat.config import get_settings
from warehouse_heartbeat.ingest.fetch_csv import fetch_all_feeds
from warehouse_heartbeat.ingest.join import build_metric_records
from warehouse_heartbeat.aggregate.heartbeat import compute_heartbeat
from warehouse_heartbeat.aggregate.rhythm import build_daily_rhythm, clean_points, recent_points
from warehouse_heartbeat.aggregate.comets import build_comet_buckets
from warehouse_heartbeat.models import CometBucket, HeartbeatPoint
from warehouse_heartbeat.viz import build_comet_map, build_heartbeat_chart, build_rhythm_ring

# feeds are re-fetched at most every five minutes
REFRESH_SECONDS = 5 * 60

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="BFCM 2025 Data Visualizations", layout="wide")
st.title("📦 BFCM 2025 Data Visualizations")
st.caption(
    "Experimental visualizations exploring fulfillment activity across "
    "orders, warehouses, countries, and more."
)

try:
    settings = get_settings()
except RuntimeError as exc:
    st.error(str(exc))
    st.stop()

# =====================================================
# Data loaders (cached)
# =====================================================
@st.cache_data(ttl=REFRESH_SECONDS, show_spinner="Fetching metrics feeds…")
def load_feeds() -> dict[str, pd.DataFrame]:
    """Fetch all five CSV feeds concurrently; failed feeds come back empty."""
    return fetch_all_feeds(settings)


def load_heartbeat() -> list[HeartbeatPoint]:
    """Join the cached feeds and score every date."""
    return clean_points(compute_heartbeat(build_metric_records(load_feeds())))


def load_comets() -> list[CometBucket]:
    """Group the cached per-country feed into comet buckets."""
    return build_comet_buckets(load_feeds().get("shippings_by_country"))


view = st.sidebar.radio(
    "View",
    ["Warehouse Heartbeat", "Daily Rhythm Rings", "Comet Trails Map"],
)

# =====================================================
# SECTION 1 — HEARTBEAT
# =====================================================
if view == "Warehouse Heartbeat":
    st.header("💓 Warehouse Heartbeat")
    st.caption(
        "Hourly operational intensity across orders, labels, pickers, packers, "
        "warehouses, and active shipping countries."
    )

    points = recent_points(load_heartbeat())
    if not points:
        st.warning("Heartbeat data not available. Check the feed URLs and logs.")
    else:
        latest = points[-1]
        c1, c2, c3 = st.columns(3)
        with c1:
            st.metric("Latest Intensity", f"{latest.intensity:.1f}")
        with c2:
            st.metric("Orders", latest.metrics.orders)
        with c3:
            st.metric("Active Countries", latest.metrics.active_countries)

        st.altair_chart(build_heartbeat_chart(points), width="stretch")

# =====================================================
# SECTION 2 — RHYTHM RINGS
# =====================================================
elif view == "Daily Rhythm Rings":
    st.header("🌀 Warehouse Rhythm Rings")
    st.caption(
        "Each ring is a day. Each spoke is an hour. Longer, brighter spokes "
        "mark the most intense moments in the fulfillment cycle."
    )

    rings = build_daily_rhythm(load_heartbeat())
    if not rings:
        st.warning("Rhythm data not available.")
    else:
        cols = st.columns(3)
        for i, day in enumerate(rings):
            with cols[i % 3]:
                st.altair_chart(build_rhythm_ring(day))
        st.caption("One spoke per hour (UTC) • Longer = more intense")

# =====================================================
# SECTION 3 — COMET MAP
# =====================================================
else:
    st.header("☄️ Warehouse Comet Trails")
    st.caption(
        "Each bucket launches arcs from New York to active shipping countries. "
        "Arc width represents shipping volume."
    )

    buckets = load_comets()
    if not buckets:
        st.warning("Comet data not available.")
    else:
        dates = [b.date for b in buckets]
        selected = (
            st.select_slider("Date", options=dates, value=dates[-1])
            if len(dates) > 1
            else dates[0]
        )
        bucket = buckets[dates.index(selected)]

        st.altair_chart(build_comet_map(bucket), width="stretch")
        st.dataframe(
            pd.DataFrame(
                [{"country": a.country, "labels": a.count} for a in bucket.arcs]
            ).sort_values("labels", ascending=False),
            width="stretch",
        )

# =====================================================
# Footer
# =====================================================
st.caption("Public BFCM 2025 metrics CSVs • pandas • Dask • Altair • Streamlit")
