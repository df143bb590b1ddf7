"""Domain layer for fintracker application."""
