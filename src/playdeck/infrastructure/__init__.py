"""Infrastructure layer: HTTP integrations, observability and lifecycle."""
