"""warehouse_heartbeat package.

Contains modules for fetching the public fulfillment metrics CSV feeds,
joining them into per-date records, scoring each date with a composite
"intensity", and shaping the results for the Streamlit dashboard views
(heartbeat timeline, daily rhythm rings, comet map).

Architecture:
- CSV feeds → joined MetricRecords → HeartbeatPoints / CometBuckets
- Dask delayed tasks fetch the five feeds concurrently
- Pydantic models define the JSON contract of every output
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
