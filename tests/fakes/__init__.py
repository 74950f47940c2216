"""
Test Fakes Module

Provides fake implementations for testing without a running Redis.
"""

from tests.fakes.fake_tag_store import FakeTagStore

__all__ = [
    "FakeTagStore",
]
