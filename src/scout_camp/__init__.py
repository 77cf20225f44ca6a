"""Scout Camp - a small top-down camp game."""
