"""Domain models, settings and interfaces for cinode-sync."""
