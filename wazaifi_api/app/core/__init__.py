"""Core infrastructure: settings, logging, errors and collection storage."""
