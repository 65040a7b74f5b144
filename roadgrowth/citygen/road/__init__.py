"""Road growth: scheduling, constraint checking and expansion of road queries."""
