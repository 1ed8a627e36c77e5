"""Wellness tracker: mood, medication, supplement and habit logging with analytics."""

__version__ = "0.1.0"
