"""Schema declarations for analysis records."""
