"""Application services: use cases orchestrated over Units of Work."""
