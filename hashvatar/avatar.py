"""
Public entry points: build options, derive the palette and run one renderer.
create_hashvatar allocates a surface; render_hashvatar draws into the caller's.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from .color import OklchColor, hash_to_colors
from .hashing import hash_to_seeds
from .render import FrameScheduler, RenderHandle, Surface, render_dither, render_gradient

logger = logging.getLogger(__name__)

MODES = ("gradient", "dither")


@dataclass
class HashvatarOptions:
    """Render options. `hash` may be any string (wallet, username, UUID...).

    `pixel_ratio` sets the backing density of whichever surface is drawn into;
    None keeps the surface's own ratio (1.0 for a new surface).
    """

    hash: str
    size: int = 64
    mode: str = "gradient"
    animated: bool = False
    dot_scale: int | None = None
    tones: list[str] | None = None
    pixel_ratio: float | None = None

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {self.mode!r}")
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        if self.dot_scale is not None and self.dot_scale <= 0:
            raise ValueError(f"dot_scale must be positive, got {self.dot_scale}")

    @property
    def color_count(self) -> int:
        return 4 if self.mode == "gradient" else 2


@dataclass
class HashvatarResult:
    surface: Surface
    colors: list[OklchColor]
    destroy: Callable[[], None] = field(repr=False)


def options_from_config(config: dict[str, Any], hash: str, **overrides: Any) -> HashvatarOptions:
    """Options from the `render` config section; non-None overrides win."""
    render_cfg = dict(config.get("render", {}))
    render_cfg.update({k: v for k, v in overrides.items() if v is not None})
    known = {"size", "mode", "animated", "dot_scale", "tones", "pixel_ratio"}
    kwargs = {k: v for k, v in render_cfg.items() if k in known}
    if kwargs.get("tones") == []:
        kwargs["tones"] = None
    return HashvatarOptions(hash=hash, **kwargs)


def _draw(surface: Surface, options: HashvatarOptions) -> tuple[list[OklchColor], RenderHandle | None]:
    colors = hash_to_colors(options.hash, options.tones, options.color_count)
    seeds = hash_to_seeds(options.hash, 4)
    logger.debug(
        "Rendering %s avatar (size=%s, animated=%s): %s",
        options.mode,
        options.size,
        options.animated,
        [c.to_hex() for c in colors],
    )
    if options.mode == "dither":
        handle = render_dither(
            surface,
            size=options.size,
            colors=colors,
            seeds=seeds,
            dot_scale=options.dot_scale,
            animated=options.animated,
        )
    else:
        handle = render_gradient(
            surface, size=options.size, colors=colors, seeds=seeds, animated=options.animated
        )
    return colors, handle


def _destroyer(handle: RenderHandle | None) -> Callable[[], None]:
    def destroy() -> None:
        if handle is not None:
            handle()

    return destroy


def create_hashvatar(
    options: HashvatarOptions,
    *,
    scheduler: FrameScheduler | None = None,
) -> HashvatarResult:
    """Render into a new surface. Animated renders are driven by `scheduler`."""
    pixel_ratio = 1.0 if options.pixel_ratio is None else options.pixel_ratio
    surface = Surface(device_pixel_ratio=pixel_ratio, scheduler=scheduler)
    colors, handle = _draw(surface, options)
    return HashvatarResult(surface=surface, colors=colors, destroy=_destroyer(handle))


def render_hashvatar(surface: Surface, options: HashvatarOptions) -> Callable[[], None]:
    """Render into an existing surface. Returns destroy (no-op when not animated)."""
    if options.pixel_ratio is not None:
        surface.device_pixel_ratio = options.pixel_ratio
    _, handle = _draw(surface, options)
    return _destroyer(handle)
