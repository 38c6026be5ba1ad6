"""Reconstruction of inter-word whitespace from horizontal gaps."""
from typing import Optional, Sequence

from pdflayout.config import config
from pdflayout.layout.normalizer import round_half_up
from pdflayout.models.schemas import Number, TextRun


def synthesize_line_text(
    runs: Sequence[TextRun],
    line_x: Number,
    preserve_spacing: bool = True,
    space_width_ratio: Optional[float] = None,
    max_spaces: Optional[int] = None
) -> str:
    """
    Build the text of a line from its left-to-right runs.

    With spacing preserved, a gap wider than the run's font size becomes
    ``round(gap / (font_size * space_width_ratio))`` spaces, capped at
    ``max_spaces``. Otherwise runs are joined by a single space.

    Args:
        runs: Runs of one line, sorted by x
        line_x: Left edge of the line
        preserve_spacing: Whether to synthesize spacing from gaps
        space_width_ratio: Width of a space as a fraction of the font size
        max_spaces: Upper bound of spaces inserted for one gap

    Returns:
        Line text
    """
    if not preserve_spacing:
        return " ".join(run.text for run in runs)

    if space_width_ratio is None:
        space_width_ratio = config.get('spacing.space_width_ratio', 0.3)
    if max_spaces is None:
        max_spaces = config.get('spacing.max_spaces', 10)

    parts = []
    last_x = line_x
    for run in runs:
        gap = run.x - last_x
        # Zero, negative or NaN sizes never produce spacing
        if run.font_size > 0 and gap > run.font_size:
            spaces = round_half_up(gap / (run.font_size * space_width_ratio))
            parts.append(" " * min(spaces, max_spaces))
        parts.append(run.text)
        last_x = run.x + run.width
    return "".join(parts)
