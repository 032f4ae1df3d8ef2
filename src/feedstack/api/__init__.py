"""HTTP API for feedstack."""
