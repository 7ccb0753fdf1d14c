"""In-memory limit order book, matching engine, queues and object pool."""

__version__ = "1.0.0"
__all__ = ["__version__"]