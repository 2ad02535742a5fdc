"""
Cinema Catalog Application Package.

This package contains the catalog store, the lifecycle cleaner, query and
mutation services, exports, and the HTTP API.
"""

__version__ = "1.0.0"
