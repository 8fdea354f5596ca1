"""Custom exception hierarchy for the share review layer."""


class ShareReviewError(Exception):
    """Base exception for all share review errors."""


class ShareNotFoundError(ShareReviewError):
    """Raised when a persisted share does not exist (or no longer exists)."""


class PathNotFoundError(ShareReviewError):
    """Raised when an owner root folder or file cannot be resolved."""


class MalformedActionError(ShareReviewError, ValueError):
    """Raised when a composite action token lacks the namespace separator."""


class SourceError(ShareReviewError):
    """Raised when a pluggable share source cannot be instantiated."""


class AuthenticationRequiredError(ShareReviewError):
    """Raised when an operation needs a user and none is available."""
