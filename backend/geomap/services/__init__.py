"""Boundary aggregation, viewport filtering and selection services."""
