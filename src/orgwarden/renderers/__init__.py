"""Renderers for audit output.

- chart: SVG pie chart of ownership shares
"""

from orgwarden.renderers.chart import render_ownership_chart

__all__ = ["render_ownership_chart"]
