"""Photo Editor: turn a snapshot into a professional portrait with an AI image model."""

__version__ = "0.1.0"
