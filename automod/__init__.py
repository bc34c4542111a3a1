"""automod — deterministic content moderation for forum threads and replies."""

__version__ = "0.1.0"
