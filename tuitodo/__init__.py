"""Keyboard-driven terminal to-do list with reducer-based state and JSON persistence."""

__version__ = "0.1.0"