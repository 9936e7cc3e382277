"""Rail ticket search, purchase, pricing and lifecycle client."""

__version__ = "0.1.0"
