from fastapi import status


class BaseAPIException(Exception):
    """Base exception for API errors"""

    error_code = "internal_error"

    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.detail = detail
        self.status_code = status_code
        super().__init__(self.detail)


class NotFoundException(BaseAPIException):
    """Exception for not found errors"""

    error_code = "not_found"

    def __init__(self, detail: str):
        super().__init__(detail, status_code=status.HTTP_404_NOT_FOUND)


class ValidationException(BaseAPIException):
    """Exception for data validation errors"""

    error_code = "validation_error"

    def __init__(self, detail: str):
        super().__init__(detail, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)


class UnsupportedFileTypeException(BaseAPIException):
    """Exception for uploads whose extension has no text extractor"""

    error_code = "unsupported_file_type"

    def __init__(self, detail: str):
        super().__init__(detail, status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE)


class DocumentProcessingException(BaseAPIException):
    """Exception for document processing errors"""

    error_code = "document_processing_error"

    def __init__(self, detail: str):
        super().__init__(detail, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
