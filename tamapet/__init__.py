"""Collectible pet stat engine: decay, feeding, training and levels."""

__version__ = "1.0.0"
