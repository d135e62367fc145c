"""HTTP API for the routine builder."""
