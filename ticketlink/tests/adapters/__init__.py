"""Tests for adapter implementations against mocked HTTP backends."""
