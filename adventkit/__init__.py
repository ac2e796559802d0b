"""Tools for scaffolding, running, timing and submitting Advent of Code solutions."""

__version__ = "0.1.0"