"""Detection of comma-separated runs and their rendering as GFM tables."""
