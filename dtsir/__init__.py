"""dtsir — type model for declaration-file binding generators."""

__version__ = "0.1.0"
