# Deterministic avatars from any string: seeded palette + procedural renderers

from .avatar import (
    HashvatarOptions,
    HashvatarResult,
    create_hashvatar,
    options_from_config,
    render_hashvatar,
)
from .color import (
    OklchColor,
    generate_color,
    hash_to_colors,
    oklch_to_css,
    oklch_to_hex,
    parse_tone,
    rgb_to_oklch,
)
from .hashing import hash_to_seeds
from .render import (
    ManualFrameScheduler,
    Surface,
    ThreadedFrameScheduler,
    render_dither,
    render_gradient,
)

__all__ = [
    "HashvatarOptions",
    "HashvatarResult",
    "create_hashvatar",
    "options_from_config",
    "render_hashvatar",
    "OklchColor",
    "generate_color",
    "hash_to_colors",
    "oklch_to_css",
    "oklch_to_hex",
    "parse_tone",
    "rgb_to_oklch",
    "hash_to_seeds",
    "ManualFrameScheduler",
    "Surface",
    "ThreadedFrameScheduler",
    "render_dither",
    "render_gradient",
]
