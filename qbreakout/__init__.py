"""Breakout game mechanics, replay and frame buffers, clustering utilities and Q-learning interfaces."""

__version__ = "0.1.0"