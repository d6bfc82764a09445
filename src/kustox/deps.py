"""
KustoX - Dependency Injection.

FastAPI dependencies for feature flags and the results services.
"""

from typing import Annotated

from fastapi import Depends

from kustox.config import FeatureFlags, Settings, get_settings
from kustox.exceptions import FeatureDisabledException
from kustox.modules.results.store import QueryResultsFileSystem, get_results_store
from kustox.modules.results.tree import ResultsTreeProvider, get_tree_provider


# =============================================================================
# Settings Dependencies
# =============================================================================


def get_features(settings: Annotated[Settings, Depends(get_settings)]) -> FeatureFlags:
    """Get feature flags from settings."""
    return settings.features


# =============================================================================
# Feature Flag Guards
# =============================================================================


def require_feature(feature_name: str):
    """Create a dependency that requires a specific feature to be enabled."""

    def check_feature(features: Annotated[FeatureFlags, Depends(get_features)]) -> bool:
        if not getattr(features, feature_name, False):
            raise FeatureDisabledException(feature_name)
        return True

    return check_feature


require_results = Depends(require_feature("results"))
require_tree = Depends(require_feature("tree"))


# =============================================================================
# Services
# =============================================================================


def get_store() -> QueryResultsFileSystem:
    return get_results_store()


def get_tree() -> ResultsTreeProvider:
    return get_tree_provider()


ResultsStore = Annotated[QueryResultsFileSystem, Depends(get_store)]
ResultsTree = Annotated[ResultsTreeProvider, Depends(get_tree)]
