"""Infrastructure: snapshot persistence backends."""
