"""Core infrastructure: settings, logging, exceptions and storage."""
