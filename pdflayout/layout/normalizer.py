"""Conversion of parser-native runs into top-down page coordinates."""
import logging
import math
from typing import List, Union

from pdflayout.models.schemas import TextRun
from pdflayout.parsing.base import RawPage, RawTextRun

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> Union[int, float]:
    """Round to the nearest integer, halves away from -inf.

    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))


def normalize_run(raw: RawTextRun, viewport_height: float, index: int) -> TextRun:
    """
    Convert one raw run into page coordinates with a top-left origin.

    The transform's horizontal scale ``a`` stands in for the point size.

    Args:
        raw: Run as emitted by the parser
        viewport_height: Page height used to flip the y axis
        index: Emission order of the run within its page

    Returns:
        Normalized TextRun
    """
    a, _, _, _, e, f = raw.transform
    run = TextRun(
        text=raw.text,
        x=round_half_up(e),
        y=round_half_up(viewport_height - f),
        width=round_half_up(raw.width),
        height=round_half_up(raw.height),
        font_name=raw.font_name,
        font_size=round_half_up(a),
        index=index
    )
    if run.is_degenerate:
        logger.debug(f"Degenerate geometry for run {index} ({raw.text!r}): transform={raw.transform}")
    return run


def normalize_page(page: RawPage) -> List[TextRun]:
    """Normalize every run of a page, indexed in emission order."""
    return [
        normalize_run(raw, page.height, index)
        for index, raw in enumerate(page.runs)
    ]
