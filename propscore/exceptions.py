"""Custom exception hierarchy for propscore."""


class PropScoreError(Exception):
    """Base exception for all propscore errors."""


class ConfigurationError(PropScoreError):
    """Raised when configuration is invalid or a rubric profile is unknown."""


class EntityNotFoundError(PropScoreError):
    """Raised when a referenced analysis record does not exist."""


class InvalidAnalysisStateError(PropScoreError):
    """Raised when an analysis record is in an invalid state for the operation."""


class DataSourceError(PropScoreError):
    """Raised when property attributes cannot be acquired."""


class SinkError(PropScoreError):
    """Raised when a sink operation fails."""
