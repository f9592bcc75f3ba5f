"""
Structured logging package for the creation rules engine.

All imports should use explicit paths like
'from mythos_creation.structured_logging.logging_config import get_logger'.

The directory is named 'structured_logging' rather than 'logging' to avoid
shadowing Python's standard library logging module.
"""

__all__: list[str] = []
