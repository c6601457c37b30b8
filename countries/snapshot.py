"""Summary image of the latest refresh.

``render`` draws the PNG in memory; ``SnapshotSlot`` owns the single file it
is published to.
"""
import io
import logging
import os
import tempfile
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from .utils import get_summary_image_path

logger = logging.getLogger(__name__)

WIDTH, HEIGHT = 800, 600
BACKGROUND = "#1a1a1a"
TOP_N = 5
NAME_LIMIT = 20

FONT_CANDIDATES = ("DejaVuSans.ttf", "arial.ttf")


def _font(size):
    for name in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default()


def truncate_name(name, limit=NAME_LIMIT):
    if len(name) <= limit:
        return name
    return name[:limit] + "..."


def format_billions(value):
    if value is None:
        return "N/A"
    return f"{value / 1_000_000_000:,.2f}B"


def format_rank_line(rank, country):
    return f"{rank}. {truncate_name(country.name)} — ${format_billions(country.estimated_gdp)}"


def _centered(draw, y, text, font, fill):
    x = (WIDTH - draw.textlength(text, font=font)) / 2
    draw.text((x, y), text, fill=fill, font=font)


def render(top, total_count, as_of):
    """
    Draw the summary and return it as PNG bytes.

    ``top`` should already be ordered by estimated GDP, highest first; only
    its first five entries are drawn.
    """
    img = Image.new("RGB", (WIDTH, HEIGHT), color=BACKGROUND)
    draw = ImageDraw.Draw(img)

    _centered(draw, 50, "Country GDP Summary", _font(36), "#ffffff")
    _centered(draw, 120, f"Total Countries: {total_count}", _font(28), "#4ade80")
    _centered(draw, 180, "Top 5 by Estimated GDP", _font(24), "#60a5fa")

    body = _font(20)
    for rank, country in enumerate(list(top)[:TOP_N], start=1):
        _centered(draw, 230 + (rank - 1) * 40, format_rank_line(rank, country), body, "#e5e7eb")

    _centered(draw, 550, f"Generated: {as_of:%Y-%m-%d %H:%M:%S %Z}", _font(18), "#9ca3af")

    buf = io.BytesIO()
    img.save(buf, "PNG")
    return buf.getvalue()


class SnapshotSlot:
    """A single image file replaced atomically on every write."""

    def __init__(self, path):
        self.path = Path(path)

    def write(self, data):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".summary-", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
        logger.info("Summary image written to %s", self.path)

    def read(self):
        """Return the image bytes, or None if nothing was ever written."""
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None

    def exists(self):
        return self.path.exists()


def default_slot():
    return SnapshotSlot(get_summary_image_path())
