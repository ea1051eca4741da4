import json
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SessionUser:
    """Authenticated shopper attached to a browser session."""

    id: str
    name: str = ""
    email: str = ""
    phone: str = ""


@dataclass
class SessionContext:
    """Everything the pipeline may read about the shopper's session.

    Passed explicitly to every collaborator instead of being looked up from
    process-wide state. ``session_storage`` holds JSON strings keyed by
    ``{prefix}_{id}`` / ``{prefix}_full_{id}``; ``memory_images`` holds
    already-decoded records keyed by item id and is lost on reload.
    """

    session_id: str = ""
    session_storage: MutableMapping[str, str] = field(default_factory=dict)
    memory_images: MutableMapping[str, Mapping[str, Any]] = field(default_factory=dict)
    user: SessionUser | None = None
    auth_token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionContext":
        raw_user = data.get("user")
        user = None
        if isinstance(raw_user, Mapping) and raw_user.get("id") is not None:
            user = SessionUser(
                id=str(raw_user["id"]),
                name=str(raw_user.get("name") or ""),
                email=str(raw_user.get("email") or ""),
                phone=str(raw_user.get("phone") or ""),
            )
        return cls(
            session_id=str(data.get("sessionId") or ""),
            session_storage={
                str(k): v if isinstance(v, str) else json.dumps(v)
                for k, v in (data.get("sessionStorage") or {}).items()
            },
            memory_images={
                str(k): v for k, v in (data.get("memoryImages") or {}).items()
            },
            user=user,
            auth_token=data.get("authToken"),
        )
