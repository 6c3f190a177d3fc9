"""CommResolve - cluster partition resolution for communication problems."""

__version__ = "0.1.0"
