"""Tests for mrrfantasy."""
