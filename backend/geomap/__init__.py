"""Administrative boundary aggregation and viewport filtering."""
