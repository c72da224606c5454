"""Core infrastructure: settings, logging, database, Redis and Sentry."""
