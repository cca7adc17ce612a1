"""
Symbology module: category-to-color mappings for map layers and charts.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple, Union
import logging

import matplotlib.colors as mcolors
import pandas as pd
import seaborn as sns

from .errors import DomainError, PaletteError, SchemaError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColorMapping:
    """Lookup from category label to hex color; `palette[i]` colors `domain[i]`."""

    domain: Tuple[Any, ...]
    palette: Tuple[str, ...]

    def __post_init__(self):
        if len(set(self.domain)) != len(self.domain):
            raise PaletteError(f"Color domain has duplicate labels: {list(self.domain)}")
        if len(self.palette) < len(self.domain):
            raise PaletteError(
                f"Palette has {len(self.palette)} colors for {len(self.domain)} categories"
            )

    def __call__(self, value) -> str:
        try:
            return self.palette[self.domain.index(value)]
        except ValueError:
            raise DomainError(f"{value!r} is not in the color domain {list(self.domain)}") from None

    def __len__(self):
        return len(self.domain)

    def as_dict(self) -> Dict[Any, str]:
        return dict(zip(self.domain, self.palette))

    def legend_items(self) -> List[Tuple[Any, str]]:
        return list(zip(self.domain, self.palette))


def generate_palette(base_palette: Union[str, Sequence[str]], n_colors: int) -> List[str]:
    """
    Produce `n_colors` distinct hex colors from a named palette or a color list.

    A name is passed to seaborn (e.g. 'husl', 'Set2', 'viridis'). An explicit
    list is truncated when long enough and otherwise interpolated along a
    matplotlib colormap ramp through its colors.

    Raises:
        PaletteError: empty or invalid palette, unknown name, or fewer than
            `n_colors` distinct colors
    """
    if n_colors <= 0:
        return []

    if isinstance(base_palette, str):
        try:
            colors = [mcolors.to_hex(c) for c in sns.color_palette(base_palette, n_colors)]
        except ValueError as e:
            raise PaletteError(f"Unknown palette {base_palette!r}: {e}") from e
    else:
        base = list(base_palette)
        if not base:
            raise PaletteError("Base palette is empty")
        invalid = [c for c in base if not mcolors.is_color_like(c)]
        if invalid:
            raise PaletteError(f"Invalid colors in base palette: {invalid}")

        hexes = [mcolors.to_hex(c) for c in base]
        if len(hexes) >= n_colors:
            colors = hexes[:n_colors]
        elif len(hexes) == 1:
            colors = hexes * n_colors
        else:
            ramp = mcolors.LinearSegmentedColormap.from_list("geoviz_ramp", hexes)
            colors = [mcolors.to_hex(ramp(i / (n_colors - 1))) for i in range(n_colors)]
            logger.debug("Interpolated %d base colors to %d", len(hexes), n_colors)

    distinct = len({c.lower() for c in colors})
    if distinct < n_colors:
        raise PaletteError(
            f"Palette {base_palette!r} yields {distinct} distinct colors, {n_colors} needed"
        )
    return colors


def build_color_mapping(table, category_column, base_palette) -> ColorMapping:
    """
    Map each distinct value of `category_column` to its own color.

    The domain lists non-null values in first-seen order, so the same table
    and palette always give the same assignment.

    Raises:
        SchemaError: `category_column` is absent
        PaletteError: the palette cannot cover the domain
    """
    if category_column not in table.columns:
        raise SchemaError(f"'{category_column}' column not found", missing=[category_column])

    domain = tuple(pd.unique(table[category_column].dropna()).tolist())
    palette = tuple(generate_palette(base_palette, len(domain)))

    logger.debug("Color mapping for '%s': %d categories", category_column, len(domain))
    return ColorMapping(domain=domain, palette=palette)
