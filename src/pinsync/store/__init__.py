"""Local stores: points, color groups, preferences and view state."""
