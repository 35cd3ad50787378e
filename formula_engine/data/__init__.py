"""Static data - preset digit groups."""
