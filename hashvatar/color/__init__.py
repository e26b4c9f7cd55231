# OKLCH color handling: conversion, tone parsing, palette derivation

from .convert import (
    MAX_CHROMA,
    OklchColor,
    hex_to_rgb,
    oklch_to_css,
    oklch_to_hex,
    oklch_to_rgb,
    rgb_to_oklch,
)
from .palette import generate_color, hash_to_colors
from .tones import parse_tone, parse_tones

__all__ = [
    "MAX_CHROMA",
    "OklchColor",
    "hex_to_rgb",
    "oklch_to_css",
    "oklch_to_hex",
    "oklch_to_rgb",
    "rgb_to_oklch",
    "generate_color",
    "hash_to_colors",
    "parse_tone",
    "parse_tones",
]
