from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class TrainingRecord:
    """A stored classification example used to ground analysis prompts.

    Attributes:
        id: Opaque unique identifier assigned at insertion time.
        image: Inline-encoded image data (base64 or data URL).
        classification: Category label, e.g. "good" or "bad".
        mime_type: Image content type; serialized as `mimeType`.
        notes: Optional free-text reviewer notes.
        annotations: Opaque marker objects drawn on the image.
        timestamp: ISO-8601 string, defaults to server receipt time.
    """

    id: str
    image: str
    classification: str
    mime_type: str = "image/jpeg"
    notes: str = ""
    annotations: List[Any] = field(default_factory=list)
    timestamp: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingRecord":
        """Build a record from its persisted JSON form, ignoring unknown keys."""
        return cls(
            id=str(data["id"]),
            image=data.get("image") or "",
            classification=data.get("classification") or "",
            mime_type=data.get("mimeType") or "image/jpeg",
            notes=data.get("notes") or "",
            annotations=list(data.get("annotations") or []),
            timestamp=data.get("timestamp"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "image": self.image,
            "mimeType": self.mime_type,
            "classification": self.classification,
            "notes": self.notes,
            "annotations": self.annotations,
            "timestamp": self.timestamp,
        }
