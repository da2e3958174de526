"""Shared components for chaintable."""
