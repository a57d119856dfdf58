"""Rendering backends for factorlab."""

from .text_chart import ChartMode, render_counts, save_chart

__all__ = ["ChartMode", "render_counts", "save_chart"]
