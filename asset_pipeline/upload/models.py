from dataclasses import dataclass


@dataclass(frozen=True)
class UploadOutcome:
    """Normalized result of a single upload attempt sequence."""

    success: bool
    url: str | None = None
    public_id: str | None = None
    error: str | None = None

    @classmethod
    def succeeded(cls, url: str, public_id: str) -> "UploadOutcome":
        return cls(success=True, url=url, public_id=public_id)

    @classmethod
    def failed(cls, error: str) -> "UploadOutcome":
        return cls(success=False, error=error)


@dataclass(frozen=True)
class ImagePayload:
    """Binary image content decoded from a data URI."""

    content: bytes
    mime_type: str

    @property
    def extension(self) -> str:
        subtype = self.mime_type.split("/", 1)[-1].split("+", 1)[0]
        return "jpg" if subtype == "jpeg" else subtype or "bin"
