"""HTTP API for finport."""
