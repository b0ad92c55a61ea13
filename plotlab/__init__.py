"""plotlab: seaborn chart rendering service."""

__version__ = "0.3.0"
