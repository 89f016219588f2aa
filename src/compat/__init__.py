"""Historical sample corpus and compatibility checks."""
