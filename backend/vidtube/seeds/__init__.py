"""Demo data for local development."""
