"""Geometry, edit state and pixel pipeline of the crop editor."""
