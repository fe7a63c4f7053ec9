# src/conformance/dom/style.py
import re
from typing import Dict, Optional

from .core import RGB, ComputedStyle, FontWeight

DEFAULT_FONT_SIZE_PX = 16.0

NAMED_COLORS: Dict[str, tuple] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "blue": (0, 0, 255),
    "navy": (0, 0, 128),
    "yellow": (255, 255, 0),
    "orange": (255, 165, 0),
    "purple": (128, 0, 128),
    "teal": (0, 128, 128),
    "olive": (128, 128, 0),
    "maroon": (128, 0, 0),
    "silver": (192, 192, 192),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "lightgray": (211, 211, 211),
    "lightgrey": (211, 211, 211),
    "darkgray": (169, 169, 169),
    "darkgrey": (169, 169, 169),
    "aqua": (0, 255, 255),
    "cyan": (0, 255, 255),
    "fuchsia": (255, 0, 255),
    "magenta": (255, 0, 255),
}

_HEX_RE = re.compile(r"#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")
_RGB_RE = re.compile(r"rgba?\(\s*([^)]*)\)", re.IGNORECASE)
_SIZE_RE = re.compile(r"([0-9]*\.?[0-9]+)\s*(px|pt|em|rem|%)?", re.IGNORECASE)
_OPAQUE_BACKGROUND_RE = re.compile(r"url\(|gradient\(|image-set\(", re.IGNORECASE)

# Background values that let the parent background show through unchanged.
_TRANSPARENT_BACKGROUNDS = {"transparent", "none", "initial", "unset"}


def parse_declarations(style_attr: Optional[str]) -> Dict[str, str]:
    """Splits an inline style attribute into lower-cased property/value pairs."""
    declarations: Dict[str, str] = {}
    if not style_attr:
        return declarations
    for chunk in style_attr.split(";"):
        if ":" not in chunk:
            continue
        prop, value = chunk.split(":", 1)
        value = re.sub(r"\s*!important\s*$", "", value.strip(), flags=re.IGNORECASE)
        if prop.strip() and value:
            declarations[prop.strip().lower()] = value
    return declarations


def _channel(token: str) -> Optional[int]:
    token = token.strip()
    try:
        if token.endswith("%"):
            return round(float(token[:-1]) * 2.55)
        return round(float(token))
    except ValueError:
        return None


def parse_color(value: Optional[str]) -> Optional[RGB]:
    """
    Parses a CSS colour into an opaque RGB.

    Returns None for anything that is not a flat, fully opaque colour
    (transparent, partial alpha, keywords such as `inherit`, unknown names).
    """
    if not value:
        return None
    text = value.strip().lower()

    if text in NAMED_COLORS:
        return RGB(**dict(zip("rgb", NAMED_COLORS[text])))

    hex_match = _HEX_RE.fullmatch(text)
    if hex_match:
        digits = hex_match.group(1)
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) == 8:
            if digits[6:] != "ff":
                return None
            digits = digits[:6]
        return RGB(r=int(digits[0:2], 16), g=int(digits[2:4], 16), b=int(digits[4:6], 16))

    rgb_match = _RGB_RE.fullmatch(text)
    if rgb_match:
        parts = [p for p in re.split(r"[\s,/]+", rgb_match.group(1).strip()) if p]
        if len(parts) not in (3, 4):
            return None
        if len(parts) == 4:
            alpha = parts[3]
            try:
                alpha_value = float(alpha[:-1]) / 100 if alpha.endswith("%") else float(alpha)
            except ValueError:
                return None
            if alpha_value < 1:
                return None
        channels = [_channel(p) for p in parts[:3]]
        if any(c is None or c < 0 or c > 255 for c in channels):
            return None
        return RGB(r=channels[0], g=channels[1], b=channels[2])

    return None


def parse_font_size(value: Optional[str], inherited_px: Optional[float]) -> Optional[float]:
    """Converts px/pt/em/rem/% sizes to pixels. Relative units resolve against the inherited size."""
    if not value:
        return inherited_px
    match = _SIZE_RE.fullmatch(value.strip())
    if not match:
        return inherited_px
    number = float(match.group(1))
    unit = (match.group(2) or "px").lower()
    base = inherited_px if inherited_px is not None else DEFAULT_FONT_SIZE_PX
    if unit == "px":
        return number
    if unit == "pt":
        return number * 4.0 / 3.0
    if unit == "em":
        return number * base
    if unit == "rem":
        return number * DEFAULT_FONT_SIZE_PX
    return number * base / 100.0


def parse_font_weight(value: Optional[str], inherited: FontWeight) -> FontWeight:
    if not value:
        return inherited
    text = value.strip().lower()
    if text in ("bold", "bolder"):
        return FontWeight.BOLD
    if text in ("normal", "lighter"):
        return FontWeight.NORMAL
    if text.isdigit():
        return FontWeight.BOLD if int(text) >= 700 else FontWeight.NORMAL
    return inherited


class StyleContext:
    """
    Style values inherited from ancestors while the builder descends the tree.

    `background_known` becomes False below an image or gradient background;
    descendants then have no flat background unless they set their own.
    """

    def __init__(
            self,
            font_size_px: Optional[float] = None,
            font_weight: FontWeight = FontWeight.NORMAL,
            foreground: Optional[RGB] = None,
            background: Optional[RGB] = None,
            background_known: bool = True
    ):
        self.font_size_px = font_size_px
        self.font_weight = font_weight
        self.foreground = foreground
        self.background = background
        self.background_known = background_known

    def derive(self, style_attr: Optional[str]) -> "StyleContext":
        """Applies an element's inline declarations on top of the inherited context."""
        decl = parse_declarations(style_attr)
        if not decl:
            return self

        foreground = parse_color(decl["color"]) if "color" in decl else self.foreground
        if "color" in decl and foreground is None and decl["color"].strip().lower() in ("inherit", "currentcolor"):
            foreground = self.foreground

        background, background_known = self.background, self.background_known
        for prop in ("background", "background-color", "background-image"):
            if prop not in decl:
                continue
            raw = decl[prop]
            if _OPAQUE_BACKGROUND_RE.search(raw):
                background, background_known = None, False
                continue
            if prop == "background-image":
                continue
            color = parse_color(raw)
            if color is None and prop == "background":
                color = parse_color(raw.split()[0])
            if color is not None:
                background, background_known = color, True
            elif raw.split()[0].lower() not in _TRANSPARENT_BACKGROUNDS:
                # Translucent, variable or unknown colours: nothing flat to compare against.
                background, background_known = None, False

        return StyleContext(
            font_size_px=parse_font_size(decl.get("font-size"), self.font_size_px),
            font_weight=parse_font_weight(decl.get("font-weight"), self.font_weight),
            foreground=foreground,
            background=background,
            background_known=background_known,
        )

    def computed(self) -> Optional[ComputedStyle]:
        if self.font_size_px is None and self.foreground is None and self.background is None \
                and self.font_weight is FontWeight.NORMAL:
            return None
        return ComputedStyle(
            font_size_px=self.font_size_px,
            font_weight=self.font_weight,
            foreground_color=self.foreground,
            background_color=self.background if self.background_known else None,
        )
