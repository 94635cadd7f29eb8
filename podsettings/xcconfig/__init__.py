"""xcconfig generation: settings table, builders and the aggregate generator."""
