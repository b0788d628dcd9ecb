"""Command line interface for cinode-sync."""
