"""Distribution detection, categorization, settings and runtime context."""
