"""Activity tracker: a denormalized index of recent content activity."""

__version__ = "0.1.0"
