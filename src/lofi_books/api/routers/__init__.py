"""Route modules, one per resource kind."""
