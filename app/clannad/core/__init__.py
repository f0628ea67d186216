"""Core configuration and path management."""
