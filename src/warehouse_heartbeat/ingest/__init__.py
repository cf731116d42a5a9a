"""Feed ingestion: concurrent CSV downloads and the per-date join."""
