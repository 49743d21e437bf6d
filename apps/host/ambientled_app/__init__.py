"""Command-line host for ambient LED screen mirroring."""
