from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_UI_TITLE = "Wing Disc Browser"
DEFAULT_SUBTITLE = "Drosophila wing disc morphometrics"


@dataclass(frozen=True)
class SourceFiles:
    """
    File names of the three tabular sources, relative to the data root.
    """
    morphometrics: str = "mergedNormalizedGrad.csv"
    profiles: str = "mergedRawGrad.csv"
    landmarks: str = "mergedWingCoords.csv"

    @classmethod
    def from_raw(cls, raw: Optional[Dict[str, Any]]) -> SourceFiles:
        raw = raw or {}
        defaults = cls()
        return cls(
            morphometrics=raw.get("morphometrics", defaults.morphometrics),
            profiles=raw.get("profiles", defaults.profiles),
            landmarks=raw.get("landmarks", defaults.landmarks),
        )


@dataclass
class GlobalConfig:
    ui_title: str = DEFAULT_UI_TITLE
    subtitle: str = DEFAULT_SUBTITLE
    data_root: Optional[Path] = None
    sources: SourceFiles = field(default_factory=SourceFiles)

    def source_path(self, name: str) -> Path:
        """Resolve one of the SourceFiles entries against data_root."""
        file_name = Path(getattr(self.sources, name))
        if file_name.is_absolute() or self.data_root is None:
            return file_name
        return self.data_root / file_name
