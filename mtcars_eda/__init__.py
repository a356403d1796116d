"""Exploratory analysis toolbox for the Motor Trend car road tests table."""

__version__ = "0.1.0"
