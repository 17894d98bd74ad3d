"""Export the compiled semantic model of Move packages as JSON."""

__version__ = "0.1.0"
