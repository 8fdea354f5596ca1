"""sharereview: one review feed for every pending share.

Collects file shares and pluggable application shares, resolves display
names, filters to what is new since the last review, and routes deletes.
"""

__version__ = "0.1.0"

from sharereview.actions import decode_action, encode_action
from sharereview.collectors import AppShareAggregator, FileShareCollector
from sharereview.config import ReviewConfig
from sharereview.deletion import DeletionRouter
from sharereview.exceptions import (
    AuthenticationRequiredError,
    MalformedActionError,
    PathNotFoundError,
    ShareNotFoundError,
    ShareReviewError,
    SourceError,
)
from sharereview.folders import DatabaseFolderResolver
from sharereview.names import DisplayNameCache
from sharereview.pipeline import ReviewPipeline, is_new
from sharereview.preferences import AppConfigService, PreferenceService
from sharereview.protocols import (
    FileShareBackend,
    Folder,
    FolderResolver,
    PreferenceStore,
    Source,
)
from sharereview.registry import SourceRegistry
from sharereview.service import ShareReviewService
from sharereview.sharing import ShareStore
from sharereview.types import FileRef, FormattedShare, RawShare, ShareType

__all__ = [
    "AppConfigService",
    "AppShareAggregator",
    "AuthenticationRequiredError",
    "DatabaseFolderResolver",
    "DeletionRouter",
    "DisplayNameCache",
    "FileRef",
    "FileShareBackend",
    "FileShareCollector",
    "Folder",
    "FolderResolver",
    "FormattedShare",
    "MalformedActionError",
    "PathNotFoundError",
    "PreferenceService",
    "PreferenceStore",
    "RawShare",
    "ReviewConfig",
    "ReviewPipeline",
    "ShareNotFoundError",
    "ShareReviewError",
    "ShareReviewService",
    "ShareStore",
    "ShareType",
    "Source",
    "SourceError",
    "SourceRegistry",
    "__version__",
    "decode_action",
    "encode_action",
    "is_new",
]
