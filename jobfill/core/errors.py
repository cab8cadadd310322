"""Failures the engine reports to its caller."""


class JobFillError(Exception):
    """Base class for all engine failures."""


class NoDocumentError(JobFillError):
    """Field detection was invoked without a document."""


class ResumeParseError(JobFillError):
    """
    Unexpected fault while parsing résumé text.

    Carries the original input so the caller can log it or retry with a
    different extraction path (another file format, OCR, manual entry).
    """

    def __init__(self, message: str, original_text: str):
        super().__init__(message)
        self.original_text = original_text


class UnsupportedFormatError(JobFillError):
    """The résumé file is not DOCX, PDF or plain text."""


class EmptyDocumentError(JobFillError):
    """The résumé file is empty or has no extractable text."""
