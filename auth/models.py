from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class SessionUser:
    id: str
    email: str
    name: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
