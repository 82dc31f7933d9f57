"""Diet chart value objects."""
