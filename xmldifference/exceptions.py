"""Custom exceptions for the xmldifference engine."""


class XMLDifferenceError(Exception):
    """Base exception for xmldifference errors."""
    pass


class ValidationError(XMLDifferenceError):
    """Raised when input validation fails."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class XMLParseError(XMLDifferenceError):
    """Raised when a document cannot be parsed into a node tree."""
    def __init__(self, message: str, line: int = None, column: int = None, source: str = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.source = source


class DocumentSizeError(XMLDifferenceError):
    """Raised when a document exceeds the size limit."""
    def __init__(self, size_mb: float, limit_mb: float):
        super().__init__(f"Document size ({size_mb:.2f}MB) exceeds limit ({limit_mb}MB)")
        self.size_mb = size_mb
        self.limit_mb = limit_mb


class ConfigError(XMLDifferenceError):
    """Raised when engine configuration is invalid."""
    def __init__(self, message: str, key: str = None):
        super().__init__(message if key is None else f"Invalid config '{key}': {message}")
        self.message = message
        self.key = key


class ScenarioError(XMLDifferenceError):
    """Raised when a scenario file is malformed."""
    def __init__(self, path: str, message: str):
        super().__init__(f"Invalid scenario '{path}': {message}")
        self.path = path
        self.message = message
