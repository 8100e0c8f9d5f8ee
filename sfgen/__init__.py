"""sfgen: Swift accessors for the SF Symbols catalog."""

__version__ = "0.3.0"
