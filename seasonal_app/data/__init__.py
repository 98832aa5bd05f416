"""Price bar ingestion and normalization."""
