"""Top-level tour search interface.

Expose `find_tour(config)` that accepts either a `SearchConfig` or a raw job
dictionary compatible with `SearchConfig.from_dict`.
"""

from typing import Any, Optional

from src.tour import solver_core
from src.tour.model import SearchConfig, SearchResult
from src.utils.trace import Tracer


def find_tour(config: Any, tracer: Optional[Tracer] = None) -> SearchResult:
    """
    Search for a knight's tour and return the result with its board and iteration count.
    Accepts:
      - SearchConfig instances (used directly)
      - Raw job dictionaries (converted via `SearchConfig.from_dict`)
    """
    if isinstance(config, SearchConfig):
        search_config = config
    elif isinstance(config, dict):
        search_config = SearchConfig.from_dict(config)
    else:
        raise TypeError("find_tour expects a SearchConfig instance or job dictionary")

    return solver_core.solve(search_config, tracer=tracer)


__all__ = ["find_tour"]
