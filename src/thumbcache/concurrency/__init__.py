"""Concurrency — bounded async pool for batch fetches."""

from thumbcache.concurrency.pool import FetchPool

__all__ = ["FetchPool"]
