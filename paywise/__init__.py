"""Paywise personal-finance calculators and budgeting API."""

__version__ = "0.1.0"
