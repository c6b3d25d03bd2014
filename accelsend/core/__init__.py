"""Core utilities shared across accelsend."""
