"""Baseband propagation channel simulator."""
