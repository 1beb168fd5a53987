"""HTTP API for the secret game."""
