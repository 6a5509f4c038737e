"""External collaborators: the category data source and reachability monitor."""

from .category_service import (
    CategoryDataSource,
    CategoryFetchResult,
    FetchCallback,
    NYTCategoryService,
)
from .reachability import ReachabilityMonitor, SocketReachabilityMonitor

__all__ = [
    "CategoryDataSource",
    "CategoryFetchResult",
    "FetchCallback",
    "NYTCategoryService",
    "ReachabilityMonitor",
    "SocketReachabilityMonitor",
]
