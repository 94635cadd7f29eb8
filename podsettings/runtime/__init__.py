"""Runtime helpers: configuration loading and batch generation."""
