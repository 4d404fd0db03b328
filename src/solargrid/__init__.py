"""Parametric solar panel array layout with an animated capture transition."""
__version__ = "0.1.0"
