"""AWS provider implementation."""

from .provider import AWSProvider

__all__ = [
    "AWSProvider",
]
