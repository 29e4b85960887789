"""
High-level entry points for finding groups in grids and images.

:class:`GroupsFinder` keeps its options as plain attributes so they can be
tweaked between calls; every call snapshots them into a :class:`FinderOptions`
and never reads the attributes again while it runs.

Example
-------
>>> finder = GroupsFinder()
>>> finder.store_positions = False
>>> for sprite in finder.unpack_texture_atlas("atlas.png"):
...     print(sprite.bounding_rectangle)
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .feature_flags import build_options
from .grid import Grid
from .objects import collect_groups, find_groups
from .texture import ImageSource, TextureGrid
from .types import FinderOptions, Group, GroupingOutcome

logger = logging.getLogger("groups_finder.finder")
logger.addHandler(logging.NullHandler())

DEFAULT_IMAGE_OPACITY_THRESHOLD = 10


def find_color_groups(
    image: ImageSource,
    opacity_threshold: int = DEFAULT_IMAGE_OPACITY_THRESHOLD,
    options: Optional[FinderOptions] = None,
) -> List[Group]:
    """Find groups of same-colour pixels in ``image``."""
    grid = TextureGrid(image, opacity_threshold)
    return find_groups(grid, options)


def unpack_texture_atlas(
    image: ImageSource,
    opacity_threshold: int = DEFAULT_IMAGE_OPACITY_THRESHOLD,
    options: Optional[FinderOptions] = None,
) -> List[Group]:
    """Find sprites in a texture atlas as islands of visible pixels.

    Colour is ignored: every pixel at or above ``opacity_threshold`` has the
    same value, so groups are separated by transparent pixels only.
    """
    grid = TextureGrid(image, opacity_threshold, process_value=None)
    return find_groups(grid, options)


class GroupsFinder:
    """Find groups of common values in 2D grids.

    Attributes default to :func:`build_options`, which honours the
    ``GROUPS_FINDER_*`` environment variables.

    Attributes
    ----------
    store_positions : bool
        Keep member positions in result groups. Disable to keep only
        counts and bounding boxes.
    walk_diagonally : bool
        Treat diagonal neighbours as connected.
    limit_results_count : int
        If positive, fail with :class:`ResultsLimitExceeded` once more groups
        than this are found. Use this for untrusted input.
    mark_rejected : bool
        Keep cells that failed the equivalence test from seeding later groups.
    equivalence : str
        ``"seed"`` or ``"chain"``.
    """

    def __init__(self, options: Optional[FinderOptions] = None) -> None:
        options = options or build_options()
        self.store_positions = options.store_positions
        self.walk_diagonally = options.walk_diagonally
        self.limit_results_count = options.limit_results_count
        self.mark_rejected = options.mark_rejected
        self.equivalence = options.equivalence

    @property
    def options(self) -> FinderOptions:
        """Snapshot of the current attributes."""
        return FinderOptions(
            store_positions=self.store_positions,
            walk_diagonally=self.walk_diagonally,
            limit_results_count=self.limit_results_count,
            mark_rejected=self.mark_rejected,
            equivalence=self.equivalence,
        )

    def find_groups(self, grid: Grid) -> List[Group]:
        """Find and return the groups in ``grid``."""
        return find_groups(grid, self.options)

    def collect_groups(self, grid: Grid) -> GroupingOutcome:
        """Like :meth:`find_groups` but report an exceeded limit in the result."""
        return collect_groups(grid, self.options)

    def find_color_groups(
        self, image: ImageSource, opacity_threshold: int = DEFAULT_IMAGE_OPACITY_THRESHOLD
    ) -> List[Group]:
        """Find groups of same-colour pixels in ``image``."""
        return find_color_groups(image, opacity_threshold, self.options)

    def unpack_texture_atlas(
        self, image: ImageSource, opacity_threshold: int = DEFAULT_IMAGE_OPACITY_THRESHOLD
    ) -> List[Group]:
        """Find the sprites of a texture atlas by transparency boundaries."""
        groups = unpack_texture_atlas(image, opacity_threshold, self.options)
        logger.debug("atlas unpacked into %d sprites", len(groups))
        return groups
