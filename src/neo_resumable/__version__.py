"""Version information for neo-resumable."""

__version__ = "1.0.0"
