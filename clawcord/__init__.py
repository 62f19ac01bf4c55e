"""
Top-level package for the Discord to OpenClaw relay bot.

This package hosts:
- environment-driven config loading and validation
- the OpenClaw chat-completion client
- the Discord client, message dispatcher and lifecycle handlers
"""

__version__ = "1.0.0"
