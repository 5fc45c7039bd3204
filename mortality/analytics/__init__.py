"""Aggregations over normalized mortality records."""
