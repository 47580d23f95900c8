"""Release pipeline descriptor tooling."""

__version__ = "0.1.0"
