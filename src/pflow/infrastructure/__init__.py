"""Infrastructure layer — resolving model declarations from code."""
