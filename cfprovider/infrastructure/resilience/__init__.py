"""API Resilience Implementations.

Contains the rate limiter and the retry policy with bounded exponential
backoff used by every call made through a client handle.
Bounded Context: API Resilience
"""
