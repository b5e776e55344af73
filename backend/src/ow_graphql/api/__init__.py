"""Invocation handling: classification, execution and lifecycle."""
