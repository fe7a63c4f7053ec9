# src/conformance/checks/contrast.py
"""
Colour contrast (WCAG 1.4.3).

Ratios are computed from relative luminance of the text and its resolved
flat background. Nodes whose colours could not be resolved are skipped
rather than guessed.
"""
import logging
from enum import Enum
from typing import List

from ..dom.core import RGB, CheckDefinition, ComputedStyle, FontWeight, audit_spec
from ..model import AuditConfig, RuleId, Violation

logger = logging.getLogger(__name__)

NORMAL_TEXT_MIN_RATIO = 4.5
LARGE_TEXT_MIN_RATIO = 3.0


class ContrastOutcome(str, Enum):
    PASS = "pass"
    FAIL = "fail"


def _linearize(channel: int) -> float:
    """sRGB gamma decoding of one 8-bit channel."""
    c = channel / 255.0
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: RGB) -> float:
    return (
        0.2126 * _linearize(color.r)
        + 0.7152 * _linearize(color.g)
        + 0.0722 * _linearize(color.b)
    )


def contrast_ratio(fg: RGB, bg: RGB) -> float:
    """Contrast ratio between two colours, in [1.0, 21.0]; symmetric in its arguments."""
    l1 = relative_luminance(fg)
    l2 = relative_luminance(bg)
    lighter, darker = (l1, l2) if l1 >= l2 else (l2, l1)
    return (lighter + 0.05) / (darker + 0.05)


def classify(ratio: float, is_large_text: bool) -> ContrastOutcome:
    minimum = LARGE_TEXT_MIN_RATIO if is_large_text else NORMAL_TEXT_MIN_RATIO
    return ContrastOutcome.PASS if ratio >= minimum else ContrastOutcome.FAIL


def is_large_text(style: ComputedStyle, config: AuditConfig) -> bool:
    """24px (18pt) and up, or 18.66px (14pt) and up when bold. Unknown sizes count as normal text."""
    size = style.font_size_px
    if size is None:
        return False
    if size >= config.large_text_font_px:
        return True
    return style.font_weight is FontWeight.BOLD and size >= config.large_bold_text_font_px


# --- AUDIT RULES ---

@audit_spec(codes=[RuleId.COLOR_CONTRAST])
def check_text_contrast(tree, config: AuditConfig) -> List[Violation]:
    """Every node carrying its own text must meet the minimum ratio for its text size."""
    results = []
    skipped = 0

    for handle in tree.handles():
        node = tree.node(handle)
        if not node.text:
            continue

        style = node.style
        if style is None or style.foreground_color is None or style.background_color is None:
            skipped += 1
            continue

        ratio = contrast_ratio(style.foreground_color, style.background_color)
        large = is_large_text(style, config)
        if classify(ratio, large) is ContrastOutcome.FAIL:
            minimum = LARGE_TEXT_MIN_RATIO if large else NORMAL_TEXT_MIN_RATIO
            results.append(Violation.at(
                tree, handle, RuleId.COLOR_CONTRAST,
                f"Insufficient color contrast {ratio:.2f}:1 "
                f"({style.foreground_color.to_hex()} on {style.background_color.to_hex()}); "
                f"{'large' if large else 'normal'} text requires {minimum}:1"
            ))

    if skipped:
        logger.debug("Contrast skipped for %d text node(s) without resolved colors.", skipped)
    return results


# --- CHECK DEFINITION ---

DEFINITION = CheckDefinition(
    name="contrast",
    rules=[check_text_contrast],
    description="Text/background contrast ratios against WCAG AA thresholds",
)
