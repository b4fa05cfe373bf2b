"""Core domain helpers shared across layers."""
