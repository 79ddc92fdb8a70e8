"""
Exceptions raised while handling an upload.
"""


class ExtractorError(Exception):
    """Base exception for extraction errors"""
    pass


class NoFileUploadedError(ExtractorError):
    """Raised when the request carries no file"""

    def __init__(self, message: str = "No file uploaded.") -> None:
        super().__init__(message)


class UploadTooLargeError(ExtractorError):
    """Raised when the uploaded file exceeds the configured size limit"""

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(f"Upload of {size_bytes} bytes exceeds the {limit_bytes} byte limit")
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class ExtractionFailedError(ExtractorError):
    """Raised when the generative model call fails"""

    def __init__(self, message: str = "Error while extracting customer details from file.") -> None:
        super().__init__(message)


class InvalidSpreadsheetError(ExtractorError):
    """Raised when an uploaded spreadsheet cannot be opened as a workbook"""
    pass
