# This project was developed with assistance from AI tools.
"""Savings and mortgage affordability calculator for the Russian housing market."""

__version__ = "0.1.0"
