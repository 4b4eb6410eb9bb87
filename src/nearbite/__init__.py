"""Nearest-restaurant search: location resolution, distance ranking and filtering."""
