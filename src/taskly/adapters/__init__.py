"""Adapters - I/O implementations of ports."""

from .taskly_api import TasklyAPIAdapter, AuthenticationError

__all__ = [
    "TasklyAPIAdapter",
    "AuthenticationError",
]
