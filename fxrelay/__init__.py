"""Exchange-rate proxy and converter data layer."""

__version__ = "0.1.0"
