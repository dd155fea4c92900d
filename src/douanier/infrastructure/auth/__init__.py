"""Authentication: wallet signatures and merchant tokens."""
