"""Campaign records, XML message templates and request loaders, field substitution and status tracking."""

__version__ = "0.1.0"