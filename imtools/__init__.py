"""Utility toolkit for instant-messaging services."""

__version__ = "0.1.0"