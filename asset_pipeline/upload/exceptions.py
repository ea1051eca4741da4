class UploadError(Exception):
    """Base exception for asset upload failures."""


class InvalidImageDataError(UploadError):
    """Raised when the image source is obviously unusable before any network I/O."""


class UploadNetworkError(UploadError):
    """Raised when the upload host cannot be reached or times out."""


class UploadRejectedError(UploadError):
    """Raised when the upload host answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code
