"""HTTP clients for talking to this and related services."""
