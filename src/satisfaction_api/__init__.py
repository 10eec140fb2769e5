"""Satisfaction API — customer satisfaction from emotion-detection records."""

__version__ = "0.1.0"
