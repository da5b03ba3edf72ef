"""Season-long fantasy football: roster rules, points, and league standings."""

__version__ = "0.1.0"
