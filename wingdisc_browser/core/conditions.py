from __future__ import annotations

from typing import Dict, List, Optional, Tuple

# Fixed experimental conditions, in legend order
CONDITIONS: List[str] = ["standard", "hypoxia", "cold"]

CONDITION_COLOURS: Dict[str, str] = {
    "standard": "#d95f02",
    "hypoxia": "#7570b3",
    "cold": "#1b9e77",
}

CONDITION_SYMBOLS: Dict[str, str] = {
    "standard": "circle",
    "hypoxia": "triangle-up",
    "cold": "square",
}

FALLBACK_COLOUR = "#999999"

N_LANDMARKS = 15

# Anatomical connectivity between numbered landmarks (1-based)
LANDMARK_CONNECTIONS: List[Tuple[int, int]] = [
    (1, 7), (2, 6), (2, 7), (3, 5), (3, 9),
    (4, 5), (4, 15), (5, 11), (6, 12), (7, 12),
    (8, 6), (8, 9), (8, 13), (9, 10), (10, 11),
    (10, 14), (11, 15), (12, 13), (13, 14), (14, 15),
]


def canonical_condition(raw: Optional[str]) -> str:
    """
    Map a raw condition label from any of the source tables onto one of CONDITIONS.

    Labels mentioning hypoxia map to 'hypoxia', labels mentioning cold / 17C / low
    temperature map to 'cold', everything else (including missing) is 'standard'.
    """
    if raw is None:
        return "standard"
    s = str(raw).strip().lower()
    if not s or s == "nan":
        return "standard"
    if "hypo" in s:
        return "hypoxia"
    if "cold" in s or "17c" in s or "low" in s:
        return "cold"
    return "standard"


def condition_colour(condition: str) -> str:
    return CONDITION_COLOURS.get(condition, FALLBACK_COLOUR)


def landmark_letter(point_id: int) -> str:
    """1 -> 'A', 2 -> 'B', ..."""
    return chr(64 + point_id)
