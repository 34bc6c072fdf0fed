from .strategies import (
    PATH_STRATEGIES,
    FlatPathStrategy,
    PathStrategy,
    PrefixedPathStrategy,
    get_path_strategy,
)

__all__ = [
    "PATH_STRATEGIES",
    "FlatPathStrategy",
    "PathStrategy",
    "PrefixedPathStrategy",
    "get_path_strategy",
]
