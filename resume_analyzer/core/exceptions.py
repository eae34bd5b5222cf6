"""
Error taxonomy for the resume analyzer.

Only InputError and UnsupportedDocumentError ever reach a caller; oracle
failures are recovered by the pipeline and show up as a heuristic-only result.
"""
from typing import Any, Dict, Optional


class ResumeAnalyzerError(Exception):
    """Base exception for the resume analyzer"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/response"""
        result = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InputError(ResumeAnalyzerError):
    """Raised when the résumé text is too short to analyze"""

    def __init__(self, message: str, length: Optional[int] = None, **kwargs):
        details = kwargs.pop("details", {})
        if length is not None:
            details["length"] = length
        super().__init__(message, error_code="INPUT_ERROR", details=details, **kwargs)


class UnsupportedDocumentError(ResumeAnalyzerError):
    """Raised when an uploaded file is not PDF, DOCX or plain text"""

    def __init__(self, message: str, file_name: Optional[str] = None, content_type: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if file_name:
            details["file_name"] = file_name
        if content_type:
            details["content_type"] = content_type
        super().__init__(message, error_code="UNSUPPORTED_DOCUMENT", details=details, **kwargs)


class OracleFailure(ResumeAnalyzerError):
    """Raised when the AI oracle errors, times out or returns unusable output"""

    def __init__(self, message: str, model_name: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if model_name:
            details["model_name"] = model_name
        kwargs.setdefault("error_code", "ORACLE_FAILURE")
        super().__init__(message, details=details, **kwargs)
        self.model_name = model_name


class MalformedOracleJSON(OracleFailure):
    """Raised when no parseable JSON object can be recovered from oracle output"""

    def __init__(self, message: str, raw_output: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if raw_output is not None:
            details["raw_output"] = raw_output[:200]
        super().__init__(message, error_code="MALFORMED_ORACLE_JSON", details=details, **kwargs)
