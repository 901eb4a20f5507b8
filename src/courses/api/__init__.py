"""HTTP surface of the course lifecycle."""
