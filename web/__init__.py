"""Web layer - diagnostics views and debug dashboard."""
