"""
Application package initializer.

This package contains the ASGI entrypoint for the API, the bookmark
store and its supporting modules.  The layout mirrors the layers of
the service: ``core`` holds configuration, logging, errors and file
storage; ``schemas`` the Pydantic models; ``services`` the business
logic; ``api`` the versioned HTTP routes.  ``serverless`` exposes the
same store through a function-per-request handler.
"""

from .main import app  # noqa: F401
