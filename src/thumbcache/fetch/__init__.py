"""Fetching — HTTP client and the batch coordinator."""

from thumbcache.fetch.client import ImageFetcher
from thumbcache.fetch.coordinator import FetchCoordinator, Notifier

__all__ = ["FetchCoordinator", "ImageFetcher", "Notifier"]
