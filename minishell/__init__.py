"""A small interactive shell with builtins, quoting, redirections, pipelines, history and completion."""

__version__ = "0.1.0"
__all__ = ["__version__"]