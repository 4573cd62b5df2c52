"""Weather phenomena token decoder.

A present-weather group is read left to right:

- optional intensity: ``-`` light, ``+`` heavy, nothing for moderate
- up to two 2-letter descriptors (e.g. TS, SH, FZ)
- 2-letter phenomenon codes for the rest of the token

Example: ``-TSRA`` = light + thunderstorm + rain
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from wx_explain.i18n.translator import lookup_text

WEATHER_DESCRIPTORS = frozenset({
    "MI", "PR", "BC", "DR", "BL", "SH", "TS", "FZ", "VC",
})

MAX_DESCRIPTORS = 2


class Intensity(Enum):
    """Precipitation intensity prefix."""

    LIGHT = "-"
    MODERATE = ""
    HEAVY = "+"


@dataclass(frozen=True)
class WeatherToken:
    """Segmented weather group."""

    code: str
    intensity: Intensity
    descriptors: tuple
    phenomena: tuple

    @property
    def segment_count(self) -> int:
        """Number of explicit segments (intensity counts only when not moderate)."""
        count = len(self.descriptors) + len(self.phenomena)
        if self.intensity is not Intensity.MODERATE:
            count += 1
        return count


def parse_weather_token(token: str) -> Optional[WeatherToken]:
    """
    Split a weather token into intensity, descriptors and phenomena.

    Greedy and positional: descriptors are taken while the next pair is
    a known descriptor (at most two), every following pair is a
    phenomenon, and a trailing single character is dropped.
    """
    if not token:
        return None
    upper = token.upper()
    index = 0
    intensity = Intensity.MODERATE
    if upper[0] in ("-", "+"):
        intensity = Intensity(upper[0])
        index = 1

    descriptors: List[str] = []
    while index + 1 < len(upper) and len(descriptors) < MAX_DESCRIPTORS:
        candidate = upper[index:index + 2]
        if candidate not in WEATHER_DESCRIPTORS:
            break
        descriptors.append(candidate)
        index += 2

    phenomena = [upper[i:i + 2] for i in range(index, len(upper) - 1, 2)]

    return WeatherToken(
        code=upper,
        intensity=intensity,
        descriptors=tuple(descriptors),
        phenomena=tuple(phenomena),
    )


def weather_segments(token: str, translator: Callable) -> List[str]:
    """Localized texts of the segments that resolve, in token order."""
    parsed = parse_weather_token(token)
    if parsed is None:
        return []

    parts: List[str] = []
    if parsed.intensity is not Intensity.MODERATE:
        text = lookup_text(translator, f"weather.intensity.{parsed.intensity.value}")
        if text:
            parts.append(text)
    for code in parsed.descriptors:
        text = lookup_text(translator, f"weather.descriptor.{code}")
        if text:
            parts.append(text)
    for code in parsed.phenomena:
        text = lookup_text(translator, f"weather.phenomena.{code}")
        if text:
            parts.append(text)
    return parts


def explain_weather_token(token: str, translator: Callable) -> str:
    """
    Render a weather token with a bracketed gloss.

    Returns the bare upper-case code when no segment resolves, and an
    empty string for an empty token.
    """
    if not token:
        return ""
    upper = token.upper()
    parts = weather_segments(upper, translator)
    if not parts:
        return upper
    return f"{upper} ({' '.join(parts)})"


def explain_weather_list(tokens: Sequence[str], translator: Callable) -> str:
    if not tokens:
        return ""
    return ", ".join(explain_weather_token(token, translator) for token in tokens)
