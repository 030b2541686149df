"""Natural-language activity logger."""

__version__ = "0.1.0"
