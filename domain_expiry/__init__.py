"""Domain expiry watch - registry expiry classification with a freshness cache."""

__version__ = "1.0.0"
