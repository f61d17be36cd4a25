"""Core infrastructure: settings, logging, errors and file storage."""
