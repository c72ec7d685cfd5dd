"""Moteur Dots and Boxes et couches application/simulation associées."""

__version__ = "0.1.0"
