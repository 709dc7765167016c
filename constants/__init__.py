"""Shared constants for the identity-verification app."""
