"""Deterministic two-side battle engine with soldier stacks."""
