"""Real-time next-arrival service for a light rail GTFS-Realtime feed."""

__version__ = "0.1.0"
