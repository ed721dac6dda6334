"""Ownership pie chart rendering.

Draws one sector per maintainer, sized by their ownership share, and writes
the figure as SVG.
"""

import io
import logging
import re
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from orgwarden.auditors.ownership import sorted_shares  # noqa: E402
from orgwarden.models.report import OwnershipShare  # noqa: E402

logger = logging.getLogger(__name__)

# matplotlib lays SVGs out in points, 72 per inch
SVG_UNITS_PER_INCH = 72

_SVG_SIZE_RE = re.compile(r'(<svg\b[^>]*?\s)width="[^"]*"(\s+)height="[^"]*"')


def render_ownership_chart(
    shares: OwnershipShare,
    output: Path,
    width: int = 512,
    height: int = 512,
) -> Path:
    """Render `shares` as an SVG pie chart.

    Args:
        shares: Alias -> ownership share
        output: SVG file to write
        width: Chart width in pixels
        height: Chart height in pixels

    Returns:
        Path of the written file

    Raises:
        ValueError: If there is no share to draw
    """
    ordered = [(alias, value) for alias, value in sorted_shares(shares) if value > 0]
    if not ordered:
        raise ValueError("no ownership shares to draw")

    labels = [alias for alias, _ in ordered]
    values = [value for _, value in ordered]

    fig, ax = plt.subplots(
        figsize=(width / SVG_UNITS_PER_INCH, height / SVG_UNITS_PER_INCH)
    )
    buffer = io.BytesIO()
    try:
        ax.pie(values, labels=labels, startangle=90, counterclock=False,
               textprops={"fontsize": 6})
        ax.axis("equal")
        fig.savefig(buffer, format="svg")
    finally:
        plt.close(fig)

    svg = _set_pixel_size(buffer.getvalue().decode("utf-8"), width, height)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(svg, encoding="utf-8")

    logger.debug("Rendered %d sectors (%dx%d) to %s", len(ordered), width, height, output)
    return output


def _set_pixel_size(svg: str, width: int, height: int) -> str:
    """Replace the root element's point dimensions with pixel dimensions.

    The viewBox already spans `width` x `height` user units, so only the
    outer size changes.
    """
    return _SVG_SIZE_RE.sub(
        lambda m: f'{m.group(1)}width="{width}px"{m.group(2)}height="{height}px"',
        svg,
        count=1,
    )
