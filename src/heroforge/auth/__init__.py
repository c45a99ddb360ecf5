"""Access control for administrative operations."""
