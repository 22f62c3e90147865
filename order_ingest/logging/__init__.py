"""Console logging and structured error log."""
