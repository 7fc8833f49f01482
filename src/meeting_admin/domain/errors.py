"""Error types raised by the meeting admin services."""


class InvalidInputError(ValueError):
    """Raised when a form value fails validation."""


class StorageError(RuntimeError):
    """Raised when the photo bucket refuses to remove stored files."""


class PipelineError(Exception):
    """Base class for failures scoped to a single photo batch entry."""

    code = "pipeline_error"
    default_message = "Failed to upload photo"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.default_message)
        self.detail = detail or self.default_message

    @property
    def user_message(self) -> str:
        return self.detail


class InvalidMediaType(PipelineError):
    code = "invalid_media_type"
    default_message = "Please select only image files."


class FileTooLarge(PipelineError):
    code = "file_too_large"
    default_message = "Please select images smaller than 10MB."


class DecodeError(PipelineError):
    code = "decode_error"
    default_message = "Could not read image data"


class EncodeError(PipelineError):
    code = "encode_error"
    default_message = "Could not compress image"


class UploadError(PipelineError):
    code = "upload_error"
    default_message = "Failed to upload photo"


class PhotoLimitExceeded(PipelineError):
    """The meeting already holds the maximum number of photos."""

    code = "photo_limit_exceeded"
    default_message = "Maximum 3 photos allowed per meeting."

    @property
    def user_message(self) -> str:
        return self.default_message


class MetadataWriteError(PipelineError):
    code = "metadata_write_error"
    default_message = "Failed to save photo details"
