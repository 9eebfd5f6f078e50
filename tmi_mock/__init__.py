"""Mock Twitch chat (TMI) server for exercising chat clients."""

__version__ = "1.0.0"
