from __future__ import annotations

from typing import Any, Mapping

from tablefs.application.filesystem.adapter import DatabaseAdapter
from tablefs.domain.binaries import BinaryRepository

STORE_OPTION = "store"
PATH_STRATEGY_OPTION = "path_strategy"


def create_adapter(config: Mapping[str, Any]) -> DatabaseAdapter:
    """Build an adapter from a host configuration map.

    Recognised keys: ``store`` (a BinaryRepository, required) and
    ``path_strategy`` ("flat" or "prefixed", default "flat"). Anything else is
    left to the host. Performs no I/O.
    """
    if config is None or STORE_OPTION not in config:
        raise ValueError(f"'{STORE_OPTION}' option is required to build a database filesystem")

    store = config[STORE_OPTION]
    if not isinstance(store, BinaryRepository):
        raise TypeError(
            f"'{STORE_OPTION}' must be a BinaryRepository, got {type(store).__name__}"
        )

    return DatabaseAdapter(store, path_strategy=config.get(PATH_STRATEGY_OPTION))
