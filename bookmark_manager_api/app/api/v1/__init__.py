"""
Version 1 of the API.

This subpackage bundles the bookmark and health endpoints.  Breaking
changes should be introduced in a new version subpackage (e.g. ``v2``).
"""
