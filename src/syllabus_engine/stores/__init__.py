"""
Stores module - DocumentStore implementations.
"""

from syllabus_engine.stores.memory import InMemoryDocumentStore

__all__ = ["InMemoryDocumentStore"]
