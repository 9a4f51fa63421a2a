"""Vexation: a four-player marble race rules engine."""
