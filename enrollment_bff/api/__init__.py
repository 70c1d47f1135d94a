"""HTTP request boundary for the enrollment lifecycle."""
