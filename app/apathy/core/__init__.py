"""Core path type, configuration, and logging for apathy."""
