"""Core — engine, models, configuration and observability."""
