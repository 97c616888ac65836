"""Packaged JSON schemas for fdenum problem files."""
