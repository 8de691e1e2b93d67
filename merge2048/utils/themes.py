"""
Colour themes of the game board.
"""

from dataclasses import dataclass, field

# ##: Colour of tiles above the largest value a theme defines.
FALLBACK_TILE_COLOR = '#E57373'


@dataclass(frozen=True)
class Theme:
    """
    Colours of a board theme.

    Attributes
    ----------
    board : str
        Board background.
    cell : str
        Empty cell background.
    text_light : str
        Text colour on dark tiles.
    text_dark : str
        Text colour on light tiles.
    threshold : int
        Largest tile value drawn with ``text_dark`` when ``auto_contrast`` is off.
    auto_contrast : bool
        Choose the text colour from the tile luminance instead of ``threshold``.
    tiles : dict[int, str]
        Tile colours by value.
    """

    board: str
    cell: str
    text_light: str
    text_dark: str
    threshold: int
    auto_contrast: bool = False
    tiles: dict[int, str] = field(default_factory=dict)

    def tile_color(self, value: int) -> str:
        """Background colour of a tile."""
        return self.tiles.get(int(value), FALLBACK_TILE_COLOR)

    def text_color(self, value: int) -> str:
        """Colour of the number written on a tile."""
        if self.auto_contrast:
            return self.text_dark if luminance(self.tile_color(value)) > 0.6 else self.text_light
        return self.text_dark if value <= self.threshold else self.text_light


def luminance(color: str) -> float:
    """
    Relative luminance of a ``#RRGGBB`` colour, as defined by WCAG.

    Parameters
    ----------
    color : str
        Hexadecimal colour.

    Returns
    -------
    float
        Luminance between 0 (black) and 1 (white).
    """
    digits = color.lstrip('#')

    def linear(channel: float) -> float:
        return channel / 12.92 if channel <= 0.03928 else ((channel + 0.055) / 1.055) ** 2.4

    red, green, blue = (linear(int(digits[i : i + 2], 16) / 255) for i in (0, 2, 4))
    return 0.2126 * red + 0.7152 * green + 0.0722 * blue


THEMES: dict[str, Theme] = {
    'classic': Theme(
        board='#BBADA0',
        cell='#CDC1B4',
        text_light='#F9F6F2',
        text_dark='#776E65',
        threshold=4,
        tiles={
            2: '#EEE4DA',
            4: '#EDE0C8',
            8: '#F2B179',
            16: '#F59563',
            32: '#F67C5F',
            64: '#F65E3B',
            128: '#EDCF72',
            256: '#EDCC61',
            512: '#EDC850',
            1024: '#EDC53F',
            2048: '#EDC22E',
        },
    ),
    'dark': Theme(
        board='#1A232B',
        cell='#2A343D',
        text_light='#ECEFF1',
        text_dark='#ECEFF1',
        threshold=8,
        tiles={
            2: '#455A64',
            4: '#546E7A',
            8: '#26C6DA',
            16: '#7E57C2',
            32: '#FF7043',
            64: '#FFA726',
            128: '#26A69A',
            256: '#AB47BC',
            512: '#42A5F5',
            1024: '#66BB6A',
            2048: '#FFEE58',
        },
    ),
    'pastel': Theme(
        board='#F9F7F7',
        cell='#EAEAEA',
        text_light='#5D5A5A',
        text_dark='#5D5A5A',
        threshold=8,
        auto_contrast=True,
        tiles={
            2: '#FDE2E4',
            4: '#E2ECE9',
            8: '#E9F5DB',
            16: '#FAD2E1',
            32: '#BEE1E6',
            64: '#CDE7BE',
            128: '#FAF3DD',
            256: '#D0F4DE',
            512: '#D7E3FC',
            1024: '#F1C0E8',
            2048: '#FFF3B0',
        },
    ),
    'neon': Theme(
        board='#0F1020',
        cell='#1B1D36',
        text_light='#FFFFFF',
        text_dark='#0F1020',
        threshold=8,
        auto_contrast=True,
        tiles={
            2: '#39FF14',
            4: '#14FFEC',
            8: '#FCEE09',
            16: '#FF2079',
            32: '#00F0FF',
            64: '#FF6B6B',
            128: '#7CFFCB',
            256: '#FFD93D',
            512: '#B980F0',
            1024: '#00E676',
            2048: '#FFD700',
        },
    ),
}


def get_theme(name: str) -> Theme:
    """
    Look a theme up by name.

    Raises
    ------
    KeyError
        If no theme has this name.
    """
    try:
        return THEMES[name]
    except KeyError:
        raise KeyError(f'Unknown theme {name!r}, expected one of: {", ".join(THEMES)}') from None
