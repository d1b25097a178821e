"""
Glyph Assets
============
Embedded SVG sources for the glyph node kinds, so nothing has to be
loaded from disk at runtime.
"""

from .store import VisualKind

_SVG_HEAD = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" '
    'stroke="{color}" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">'
)

BULB_SVG = _SVG_HEAD + (
    '<path d="M9 18h6"/><path d="M10 22h4"/>'
    '<path d="M15.09 14c.18-.98.65-1.74 1.41-2.5A4.65 4.65 0 0 0 18 8 6 6 0 0 0 6 8'
    'c0 1 .23 2.23 1.5 3.5A4.61 4.61 0 0 1 8.91 14"/>'
    '</svg>'
)

STAR_SVG = _SVG_HEAD + (
    '<polygon points="12 2 15.09 8.26 22 9.27 17 14.14 18.18 21.02 '
    '12 17.77 5.82 21.02 7 14.14 2 9.27 8.91 8.26 12 2"/>'
    '</svg>'
)

NOTE_SVG = _SVG_HEAD + (
    '<path d="M15.5 3H5a2 2 0 0 0-2 2v14c0 1.1.9 2 2 2h14a2 2 0 0 0 2-2V8.5L15.5 3Z"/>'
    '<path d="M15 3v6h6"/>'
    '</svg>'
)

GLYPH_SOURCES = {
    VisualKind.BULB: BULB_SVG,
    VisualKind.STAR: STAR_SVG,
    VisualKind.NOTE: NOTE_SVG,
}


def glyph_svg(kind, color="#000f9f"):
    """SVG markup for a glyph kind, or None for kinds drawn as primitives."""
    source = GLYPH_SOURCES.get(VisualKind(kind))
    if source is None:
        return None
    return source.replace('{color}', color)
