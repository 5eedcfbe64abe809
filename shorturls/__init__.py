"""Short URLs: a small link shortener with click counting."""

__version__ = "0.1.0"
