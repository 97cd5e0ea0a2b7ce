"""Rich console helpers."""
