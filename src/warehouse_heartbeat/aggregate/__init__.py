"""Aggregation helpers.

This package turns joined per-date metric records into the datasets the
dashboard draws: scored heartbeat points, daily rhythm rings, and comet
arcs grouped by date.
"""
