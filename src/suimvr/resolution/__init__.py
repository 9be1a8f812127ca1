"""Resolution layer: fetching, classification, and orchestration."""

from suimvr.resolution.classifier import ErrorClassifier, PackageResponse, TypeResponse
from suimvr.resolution.fetcher import Fetcher, FetchResponse, FetchTransportError, HttpxFetcher
from suimvr.resolution.limiter import ConcurrencyLimiter
from suimvr.resolution.resolver import MvrResolver

__all__ = [
    # Fetcher
    "FetchResponse",
    "FetchTransportError",
    "Fetcher",
    "HttpxFetcher",
    # Classification
    "ErrorClassifier",
    "PackageResponse",
    "TypeResponse",
    # Orchestration
    "ConcurrencyLimiter",
    "MvrResolver",
]
