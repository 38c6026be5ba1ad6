"""Grouping of text runs into reading-order lines."""
from typing import List, Optional, Sequence, Tuple

from pdflayout.config import config
from pdflayout.layout.spacing import synthesize_line_text
from pdflayout.models.schemas import Line, Number, TextRun


def cluster_first_fit(
    values: Sequence[Number],
    threshold: Number
) -> List[Tuple[Number, List[int]]]:
    """
    Group values around representatives, first fit.

    Representatives are scanned in creation order and a value joins the
    first one within ``threshold`` (inclusive), even when a later one is
    closer. A value that fits none becomes a new representative.

    Args:
        values: Values in encounter order
        threshold: Maximum distance to a representative

    Returns:
        (representative, member positions) pairs in creation order
    """
    groups: List[Tuple[Number, List[int]]] = []
    for position, value in enumerate(values):
        for representative, members in groups:
            if abs(value - representative) <= threshold:
                members.append(position)
                break
        else:
            groups.append((value, [position]))
    return groups


class LineAssembler:
    """Cluster runs into lines by vertical proximity."""

    def __init__(self, threshold: Optional[Number] = None, preserve_spacing: bool = True):
        """
        Initialize line assembler.

        Args:
            threshold: Vertical distance under which runs share a line
            preserve_spacing: Synthesize spacing from horizontal gaps
        """
        self.threshold = config.line_threshold if threshold is None else threshold
        self.preserve_spacing = preserve_spacing

    def assemble(self, runs: Sequence[TextRun]) -> List[Line]:
        """
        Assemble runs into lines ordered top to bottom.

        Args:
            runs: Page runs in emission order

        Returns:
            Lines sorted by representative y, items sorted by x
        """
        groups = cluster_first_fit([run.y for run in runs], self.threshold)

        lines = []
        for representative, members in sorted(groups, key=lambda group: group[0]):
            items = sorted((runs[i] for i in members), key=lambda run: run.x)
            line_x = min(item.x for item in items)
            lines.append(Line(
                y=representative,
                x=line_x,
                width=max(item.x + item.width for item in items) - line_x,
                height=max(item.height for item in items),
                items=tuple(items),
                text=synthesize_line_text(items, line_x, self.preserve_spacing)
            ))
        return lines


def assemble_lines(
    runs: Sequence[TextRun],
    threshold: Optional[Number] = None,
    preserve_spacing: bool = True
) -> List[Line]:
    """Convenience wrapper around LineAssembler."""
    return LineAssembler(threshold, preserve_spacing).assemble(runs)
