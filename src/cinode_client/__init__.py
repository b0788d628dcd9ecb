"""Cinode API access layer: authentication, gateway, resources and aggregators."""
