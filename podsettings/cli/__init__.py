"""Command implementations for the podsettings CLI."""
