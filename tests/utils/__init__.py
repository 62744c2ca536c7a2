"""Shared helpers for the StructMask tests."""
