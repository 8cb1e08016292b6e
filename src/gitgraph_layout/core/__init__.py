"""Layout engine core."""
