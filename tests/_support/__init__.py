"""Test support helpers shared across the rwmap test suite."""
