"""Tests for the inventory package."""
