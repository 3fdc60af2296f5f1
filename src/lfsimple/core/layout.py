"""Floating window layout for the lf terminal."""

from dataclasses import dataclass

from lfsimple.core.errors import ConfigError

VALID_BORDERS = {"none", "single", "double", "rounded", "solid", "shadow"}


@dataclass
class WindowLayout:
    """Size and border of the floating window.

    Attributes:
        width: Fraction of the editor's columns, in (0, 1]
        height: Fraction of the editor's lines, in (0, 1]
        border: One of the Neovim border styles
    """

    width: float = 0.8
    height: float = 0.8
    border: str = "rounded"

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"window.{name} must be a number, got {value!r}")
            if not 0 < value <= 1:
                raise ConfigError(f"window.{name} must be in (0, 1], got {value}")
        if self.border not in VALID_BORDERS:
            raise ConfigError(
                f"Invalid window.border: {self.border}. Must be one of {VALID_BORDERS}"
            )


def float_config(layout: WindowLayout, columns: int, lines: int) -> dict:
    """Compute the nvim_open_win config for a centred floating window.

    Args:
        layout: Requested size fractions and border.
        columns: Editor width in cells.
        lines: Editor height in cells.

    Returns:
        Window config dict for nvim_open_win.
    """
    width = max(1, int(columns * layout.width))
    height = max(1, int(lines * layout.height))
    row = (lines - height) // 2
    col = (columns - width) // 2

    return {
        "relative": "editor",
        "width": width,
        "height": height,
        "row": row,
        "col": col,
        "border": layout.border,
        "style": "minimal",
    }
