"""Scriptsmith - Compile hand-drawn glyphs into TrueType fonts.

Scriptsmith takes the pen strokes a user drew for each character on a canvas,
smooths and normalizes them into a 1000-unit em square, fattens every stroke
into an inked outline, unions overlapping outlines and serializes the result
as an installable TrueType font.

Example:
    $ scriptsmith my-glyphs.json --name "My Hand" --family

This will create My_Hand_Family.zip with Regular, Bold and Italic variants.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
