"""File Monitor - track edit and generation activity on watched directories."""

__version__ = "0.1.0"
