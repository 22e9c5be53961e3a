"""Find the earliest release branch that contains a given commit."""

__version__ = "0.3.0"
