"""Packaged default configuration for envinfo."""
