"""Hnefatafl rules engine and alpha-beta AI."""

__version__ = "0.1.0"
