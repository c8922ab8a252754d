"""Core domain definitions shared across layers."""
