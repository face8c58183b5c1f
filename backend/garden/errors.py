"""Exception hierarchy rendered by the app-level exception handlers."""

from __future__ import annotations


class GardenError(Exception):
    """Base error. Maps to a JSON body of ``{success: false, message}``."""

    status_code = 500

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationFailed(GardenError):
    status_code = 400


class ProjectNotFound(GardenError):
    status_code = 404

    def __init__(self, project_id: int) -> None:
        super().__init__("Project not found in the garden")
        self.project_id = project_id


class UnsupportedUpload(GardenError):
    status_code = 400


class UploadTooLarge(GardenError):
    status_code = 413
