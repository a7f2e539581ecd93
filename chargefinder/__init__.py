"""EV Charge Finder: nearby charging station aggregation and ranking."""
