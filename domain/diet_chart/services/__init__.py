"""Pure domain services for the meal workflow."""
