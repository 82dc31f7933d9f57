"""Diet chart entities."""
