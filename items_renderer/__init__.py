"""HTML fragments for a product catalogue, rendered from workflow results and served over WSGI."""

__version__ = "0.1.0"