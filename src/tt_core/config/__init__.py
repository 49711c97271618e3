"""Configuration for tt-core."""
