"""Logging, timing and ID helpers shared by the closetcolors adapters."""
