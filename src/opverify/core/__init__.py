"""Core utilities shared across opverify."""
