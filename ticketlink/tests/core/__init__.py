"""Unit tests for core domain logic.

The transport is replaced with the in-memory fake from tests/fakes/.
"""
