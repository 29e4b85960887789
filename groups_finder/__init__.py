"""Groups Finder Package.

Find connected groups of equivalent values in 2D grids. The package exposes
the :class:`GroupsFinder` facade alongside the grid contract, array and
image-backed grids, and helpers to serialise results.
"""

from .grid import Array, ArrayGrid, BaseGrid, Grid
from .types import FinderOptions, Group, GroupingOutcome, Point, Rectangle, ResultsLimitExceeded
from .feature_flags import build_options
from .objects import collect_groups, find_groups
from .texture import TextureGrid
from .finder import GroupsFinder, find_color_groups, unpack_texture_atlas
from .io_utils import load_groups, save_groups

__all__ = [
    "Array",
    "ArrayGrid",
    "BaseGrid",
    "Grid",
    "FinderOptions",
    "Group",
    "GroupingOutcome",
    "Point",
    "Rectangle",
    "ResultsLimitExceeded",
    "build_options",
    "collect_groups",
    "find_groups",
    "TextureGrid",
    "GroupsFinder",
    "find_color_groups",
    "unpack_texture_atlas",
    "load_groups",
    "save_groups",
]
