"""Versioned movie records and the compatibility decoder."""
