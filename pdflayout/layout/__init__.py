"""Layout reconstruction modules."""
from .line_assembler import LineAssembler, assemble_lines, cluster_first_fit
from .normalizer import normalize_page, normalize_run, round_half_up
from .spacing import synthesize_line_text
from .structure_analyzer import StructureAnalyzer

__all__ = [
    "LineAssembler",
    "StructureAnalyzer",
    "assemble_lines",
    "cluster_first_fit",
    "normalize_page",
    "normalize_run",
    "round_half_up",
    "synthesize_line_text",
]
