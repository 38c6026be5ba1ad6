"""Geometric structure analysis of assembled lines."""
import logging
from typing import List, Optional, Sequence

import numpy as np

from pdflayout.config import config
from pdflayout.layout.line_assembler import cluster_first_fit
from pdflayout.layout.normalizer import round_half_up
from pdflayout.models.schemas import (
    AlignmentClassification,
    ColumnGroup,
    Line,
    Number,
    PageStructure,
    TableCandidate,
)

logger = logging.getLogger(__name__)


class StructureAnalyzer:
    """
    Infer columns, table candidates and alignment from line geometry.

    The three analyses are independent of each other. Results refer to
    lines by their position in the page's line list.
    """

    def __init__(
        self,
        column_threshold: Optional[Number] = None,
        table_tolerance: Optional[Number] = None,
        table_min_lines: Optional[int] = None,
        alignment_margin: Optional[Number] = None
    ):
        """
        Initialize structure analyzer.

        Args:
            column_threshold: Horizontal distance under which line starts share a column
            table_tolerance: Maximum width difference between lines of a table candidate
            table_min_lines: Minimum lines for a table candidate
            alignment_margin: Distance from page edges/center used for alignment
        """
        self.column_threshold = (
            config.column_threshold if column_threshold is None else column_threshold
        )
        self.table_tolerance = (
            config.get('layout.table_width_tolerance', 50) if table_tolerance is None else table_tolerance
        )
        self.table_min_lines = (
            config.get('layout.table_min_lines', 3) if table_min_lines is None else table_min_lines
        )
        self.alignment_margin = (
            config.get('layout.alignment_margin', 50) if alignment_margin is None else alignment_margin
        )

    def analyze(self, lines: Sequence[Line], page_width: float) -> PageStructure:
        """
        Analyze the structure of one page.

        Args:
            lines: Page lines, top to bottom
            page_width: Page width in page units

        Returns:
            PageStructure; empty when there are no lines
        """
        if not lines:
            return PageStructure()

        structure = PageStructure(
            columns=tuple(self.detect_columns(lines)),
            table_candidates=tuple(self.detect_table_candidates(lines)),
            alignment=self.classify_alignment(lines, page_width)
        )
        logger.debug(
            f"Structure: {len(structure.columns)} columns, "
            f"{len(structure.table_candidates)} table candidates"
        )
        return structure

    def detect_columns(self, lines: Sequence[Line]) -> List[ColumnGroup]:
        """
        Cluster distinct line starts into columns.

        Distinct x values are clustered first fit in the order they are first
        seen. A line belongs to every column having a member value within the
        threshold of its x, so lines can be shared between columns.
        """
        distinct_x = list(dict.fromkeys(line.x for line in lines))
        line_x = np.array([line.x for line in lines], dtype=float)

        columns = []
        for _, positions in cluster_first_fit(distinct_x, self.column_threshold):
            members = [distinct_x[i] for i in positions]
            member_x = np.array(members, dtype=float)
            in_column = (
                np.abs(line_x[:, np.newaxis] - member_x[np.newaxis, :]) <= self.column_threshold
            ).any(axis=1)
            indices = tuple(int(i) for i in np.flatnonzero(in_column))
            columns.append(ColumnGroup(
                x=round_half_up(float(member_x.mean())),
                line_count=len(indices),
                members=tuple(members),
                line_indices=indices
            ))
        return columns

    def detect_table_candidates(self, lines: Sequence[Line]) -> List[TableCandidate]:
        """
        Find groups of lines with similar widths.

        Every line's width is tried as a key, duplicates included, and
        overlapping candidates are all kept.
        """
        widths = np.array([line.width for line in lines], dtype=float)
        similar = np.abs(widths[:, np.newaxis] - widths[np.newaxis, :]) <= self.table_tolerance

        candidates = []
        for line, row in zip(lines, similar):
            indices = np.flatnonzero(row)
            if len(indices) >= self.table_min_lines:
                candidates.append(TableCandidate(
                    width=line.width,
                    line_indices=tuple(int(i) for i in indices)
                ))
        return candidates

    def classify_alignment(
        self,
        lines: Sequence[Line],
        page_width: float
    ) -> AlignmentClassification:
        """Classify each line as left, center or right, checked in that order."""
        margin = self.alignment_margin
        buckets = {"left": [], "center": [], "right": []}

        for index, line in enumerate(lines):
            center_x = line.x + line.width / 2
            right_edge = line.x + line.width

            if line.x <= margin:
                buckets["left"].append(index)
            elif abs(center_x - page_width / 2) <= margin:
                buckets["center"].append(index)
            elif right_edge >= page_width - margin:
                buckets["right"].append(index)

        return AlignmentClassification(**{name: tuple(found) for name, found in buckets.items()})
