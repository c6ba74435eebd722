"""Analysis engine: field resolution, period extraction, classification, risk and aggregation."""
