"""Scan frame parameters model."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import FrameType


@dataclass(frozen=True)
class FrameParameters:
    """Geometry of one frame of scan data, as reported before it is read."""

    frame_type: int
    is_last_frame: bool
    bytes_per_line: int
    pixels_per_line: int
    line_count: int
    bit_depth: int

    @property
    def frame(self) -> FrameType | None:
        """The frame type as an enum, or None for values SANE does not define."""
        try:
            return FrameType(self.frame_type)
        except ValueError:
            return None

    @property
    def image_size(self) -> int | None:
        """Total bytes in the frame, or None when the line count is unknown (-1)."""
        if self.line_count < 0:
            return None
        return self.bytes_per_line * self.line_count

    def to_dict(self) -> dict:
        frame = self.frame
        return {
            "frame_type": self.frame_type,
            "frame": frame.name if frame is not None else None,
            "is_last_frame": self.is_last_frame,
            "bytes_per_line": self.bytes_per_line,
            "pixels_per_line": self.pixels_per_line,
            "line_count": self.line_count,
            "bit_depth": self.bit_depth,
        }
