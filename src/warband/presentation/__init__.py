"""Presentation layers for the battle engine."""
