from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from core.charts import default_visibility
from core.normalize import ChartRecord


ARTIFACT_FILE_NAME = "response.bin"


@dataclass(frozen=True)
class PromptArtifact:
    content: bytes
    content_type: str = ""

    @property
    def kind(self) -> str:
        """How the page shows the artifact: "image", "pdf" or "file"."""
        content_type = (self.content_type or "").lower()
        if content_type.startswith("image/"):
            return "image"
        if "pdf" in content_type:
            return "pdf"
        return "file"


@dataclass
class DashboardState:
    """Per-session UI state owned by the page controller."""

    loading: bool = False
    error: Optional[str] = None
    records: List[ChartRecord] = field(default_factory=list)
    chart_type: str = "line"
    visible: Dict[str, bool] = field(default_factory=default_visibility)

    prompt_loading: bool = False
    prompt_error: Optional[str] = None
    artifact: Optional[PromptArtifact] = None
