"""Custom exceptions for the LegatePro application."""


class LegateProException(Exception):
    """Base exception for LegatePro application."""
    
    pass


class ValidationError(LegateProException):
    """Raised when validation fails."""
    
    pass


class NotFoundError(LegateProException):
    """Raised when a resource is not found."""
    
    pass


class DatabaseError(LegateProException):
    """Raised when a database operation fails."""
    
    pass


class ServiceError(LegateProException):
    """Raised when a service operation fails."""
    
    pass


class ConfigurationError(LegateProException):
    """Raised when configuration is invalid."""
    
    pass


class AuthenticationError(LegateProException):
    """Raised when authentication fails."""
    
    pass


class AuthorizationError(LegateProException):
    """Raised when an authenticated caller lacks access."""
    
    pass


class InvalidTransitionError(ValidationError):
    """Raised when a disallowed status transition is attempted."""
    
    pass
