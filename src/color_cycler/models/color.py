"""
Color model - HSL triple

Plain value object. Range enforcement lives in utils.colors.normalize();
an HSLColor may hold raw (un-normalized) values while a strategy is
computing the next color.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

Number = Union[int, float]


@dataclass(frozen=True)
class HSLColor:
    """
    HSL color (hue degrees, saturation %, lightness %)

    Examples:
        color = HSLColor(120, 100, 50)
        color.to_dict()          # {"h": 120, "s": 100, "l": 50}
        color.status_text()      # "HSL 120 100 50"
        color.with_hue(150)      # HSLColor(h=150, s=100, l=50)
    """

    h: Number = 0
    s: Number = 100
    l: Number = 50

    # === SERIALIZATION ===

    def to_dict(self) -> Dict[str, Number]:
        """Serialize to the persisted {h, s, l} record"""
        return {"h": self.h, "s": self.s, "l": self.l}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HSLColor':
        """
        Deserialize from {h, s, l}

        Missing channels take the dataclass defaults. Values are not
        validated here; callers merge against defaults and normalize.
        """
        return cls(
            h=data.get("h", cls.h),
            s=data.get("s", cls.s),
            l=data.get("l", cls.l),
        )

    # === HELPERS ===

    def with_hue(self, hue: Number) -> 'HSLColor':
        return HSLColor(h=hue, s=self.s, l=self.l)

    def status_text(self) -> str:
        return f"HSL {self.h} {self.s} {self.l}"

    def __str__(self) -> str:
        return f"hsl({self.h}, {self.s}%, {self.l}%)"
