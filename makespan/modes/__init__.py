"""Execution modes built on top of the scheduling strategies."""
