"""Shared test data for BuildSource tests."""
