"""Unit tests: each module in isolation, no network."""
