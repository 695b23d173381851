"""SQL persistence for the press tooling domain."""
