"""Utility helpers for the identity-verification app."""
