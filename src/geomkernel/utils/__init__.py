"""Utilities shared by the geometry package: constants, type aliases, the tolerance
kernel, the timing logger and the error classes."""
