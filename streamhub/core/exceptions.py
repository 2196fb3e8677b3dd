from fastapi import status

class BaseAppException(Exception):
    """Base exception for application"""
    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class ValidationException(BaseAppException):
    """Raised when a client request is malformed"""
    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)

class InvalidFilterField(ValidationException):
    """Raised when a filter key is not allowed for the operation"""
    def __init__(self, field: str, operation: str):
        self.field = field
        self.operation = operation
        super().__init__(f"Filter '{field}' is not allowed for {operation}")

class InvalidSortField(InvalidFilterField):
    """Raised when a sort key is not allowed for the operation"""
    def __init__(self, field: str, operation: str):
        super().__init__(field, operation)
        self.message = f"Sort '{field}' is not allowed for {operation}"
        self.args = (self.message,)

class InvalidFilterValue(ValidationException):
    """Raised when a filter value cannot be coerced to the field type"""
    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Invalid value '{value}' for filter '{field}'")

class EmptySearchQuery(ValidationException):
    """Raised when a search is requested without a query"""
    def __init__(self, message: str = "Search query is required"):
        super().__init__(message)

class InvalidPageSize(ValidationException):
    """Raised when the requested page size is not positive"""
    def __init__(self, message: str = "Limit must be greater than zero"):
        super().__init__(message)

class InvalidPageNumber(ValidationException):
    """Raised when the requested page is below 1"""
    def __init__(self, message: str = "Page must be greater than zero"):
        super().__init__(message)

class ContentNotAShort(ValidationException):
    """Raised when a short is requested for non-short content"""
    def __init__(self, message: str = "Content is not a short"):
        super().__init__(message)

class EntityNotFound(BaseAppException):
    """Raised when content or a channel does not exist"""
    def __init__(self, message: str = "Entity not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class UnexpectedStoreFailure(BaseAppException):
    """Raised when the catalog store fails; details are only logged"""
    def __init__(self, message: str = "Catalog store is currently unavailable"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)
