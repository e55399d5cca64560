"""Use cases — host detection and command-line translation."""
