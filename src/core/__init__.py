"""Shared errors, config, logging, and typed models."""
