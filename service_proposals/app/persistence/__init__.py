"""
In-memory record keeping for processed quotes.
"""

from .repository import InMemoryRepository, Quote, QuoteRepository

__all__ = ["InMemoryRepository", "Quote", "QuoteRepository"]
