"""Device record model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DeviceRecord:
    """One scanner advertised by the daemon.

    ``session_id`` is an opaque handle to the session that produced the
    record. The session layer resolves it; the record never holds the
    session itself.
    """

    name: str
    vendor: str
    model: str
    type: str
    session_id: str | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "vendor": self.vendor,
            "model": self.model,
            "type": self.type,
        }

    def __repr__(self) -> str:
        return f"DeviceRecord(name={self.name!r}, vendor={self.vendor!r}, model={self.model!r})"
