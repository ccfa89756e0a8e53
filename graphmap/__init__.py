"""GraphMap: build a small labeled graph on top of a map."""

__version__ = "0.1.0"
