"""Configuration — config file loading and merging."""
