"""Tests against real SQLite engines and migrations."""
