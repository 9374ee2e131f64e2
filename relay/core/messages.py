"""Chat message value type shared by the API layer and provider adapters."""

from dataclasses import dataclass
from typing import Literal

Role = Literal["system", "user", "assistant"]

ALLOWED_ROLES: frozenset[str] = frozenset({"system", "user", "assistant"})


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}
