"""Functional-test harness for a git virtual filesystem product."""

__version__ = "0.3.0"
