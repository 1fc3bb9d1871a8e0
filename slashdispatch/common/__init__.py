"""Shared helpers used across slashdispatch modules."""
