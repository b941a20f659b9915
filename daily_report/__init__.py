"""Daily Report Service: JWT auth + daily work report lifecycle."""

__version__ = "0.1.0"
