"""
Analytical service contract shared by every summarizer.

Each service exposes two memoized, single-flight operations keyed by config:

    properties(config) -> Properties
        Derived aggregate; a pure function of config.
    summaries(config) -> Tuple[SummaryGroup, ...]
        Text synthesized from its own and/or upstream properties.

Composition:
    A service lists its upstream services in `dependencies` and awaits their
    `properties(config)` with the same config. When it needs several upstream
    results it joins them with asyncio.gather, so it never computes on partial
    results. The graph must be acyclic: each service runs
    validate_dependency_graph() over the services reachable from it on its
    first call, so callers entering a cycle at different nodes all fail instead
    of waiting on each other. Every call also checks the active request chain
    (tracked in a ContextVar), which catches an upstream rewired after that
    first check before it deadlocks on its own pending slot.

Failure handling:
    - ConfigError: raised by prepare_config before anything is computed.
    - InsufficientDataError: caught at the summary level; the service returns
      its group with an empty summaries tuple.
    - InvalidInputError / CyclicDependencyError: propagated to the caller.

Subclasses implement create_properties() and create_summaries().
"""

import logging
from abc import ABC, abstractmethod
from contextvars import ContextVar
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
    Union,
)

from pydantic import ValidationError

from summarization.core.cache import SingleFlightCache
from summarization.core.exceptions import (
    ConfigError,
    CyclicDependencyError,
    InsufficientDataError,
)
from summarization.models.schemas import (
    SummarizationConfig,
    SummarizationRequest,
    SummaryGroup,
)

logger = logging.getLogger(__name__)

P = TypeVar('P')

ConfigInput = Union[SummarizationConfig, Mapping[str, Any]]

# (service name, slot) pairs currently being computed in this call chain
_ACTIVE_CHAIN: ContextVar[Tuple[Tuple[str, str], ...]] = ContextVar(
    'summarization_active_chain', default=()
)


# =============================================================================
# Config Preparation
# =============================================================================


def prepare_config(config: ConfigInput) -> SummarizationConfig:
    """
    Validate `config` into a SummarizationConfig cache key.

    Args:
        config: A SummarizationConfig (returned as is), a SummarizationRequest
            (its summarizer selection is dropped) or a mapping of config fields.

    Raises:
        ConfigError: Missing or malformed fields, or start_date after end_date.
    """
    if isinstance(config, SummarizationRequest):
        return config.to_config()
    if isinstance(config, SummarizationConfig):
        return config
    if not isinstance(config, Mapping):
        raise ConfigError(
            f"Config must be a SummarizationConfig or a mapping, got {type(config).__name__}"
        )

    try:
        return SummarizationConfig.model_validate(dict(config))
    except ValidationError as e:
        raise ConfigError(f"Invalid summarization config: {e}") from e


# =============================================================================
# Service Base Class
# =============================================================================


class SummarizationService(ABC, Generic[P]):
    """
    Base class for analytical services.

    Attributes:
        name: Unique service name, used in cache keys and cycle reports.
        title: Title of the summary group this service produces.
        cache: Single-flight cache holding this service's slots. Services built
            by the engine share the engine's cache.
    """

    name: str = 'summarization'
    title: str = ''

    def __init__(self, cache: Optional[SingleFlightCache] = None) -> None:
        self.cache = cache if cache is not None else SingleFlightCache()
        self._graph_validated = False

    @property
    def dependencies(self) -> Sequence['SummarizationService[Any]']:
        """Upstream services whose properties this service consumes."""
        return ()

    # -------------------------------------------------------------------------
    # Public memoized operations
    # -------------------------------------------------------------------------

    async def properties(self, config: ConfigInput) -> P:
        config = prepare_config(config)
        return await self._memoized('properties', config, self.create_properties)

    async def summaries(self, config: ConfigInput) -> Tuple[SummaryGroup, ...]:
        config = prepare_config(config)
        return await self._memoized('summaries', config, self._guarded_summaries)

    # -------------------------------------------------------------------------
    # Subclass hooks
    # -------------------------------------------------------------------------

    @abstractmethod
    async def create_properties(self, config: SummarizationConfig) -> P:
        """Compute the properties for `config`. Called once per distinct config."""

    @abstractmethod
    async def create_summaries(
        self, config: SummarizationConfig
    ) -> Tuple[SummaryGroup, ...]:
        """Synthesize summary groups for `config`. Called once per distinct config."""

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _guarded_summaries(
        self, config: SummarizationConfig
    ) -> Tuple[SummaryGroup, ...]:
        try:
            return await self.create_summaries(config)
        except InsufficientDataError as e:
            logger.warning(
                f"{self.name}: no summary available for dataset "
                f"{config.dataset_id!r}: {e}"
            )
            return (SummaryGroup(title=self.title, summaries=()),)

    async def _memoized(
        self,
        slot: str,
        config: SummarizationConfig,
        compute: Callable[[SummarizationConfig], Awaitable[Any]],
    ) -> Any:
        if not self._graph_validated:
            validate_dependency_graph([self])
            self._graph_validated = True

        chain = _ACTIVE_CHAIN.get()
        frame = (self.name, slot)

        if frame in chain:
            raise CyclicDependencyError(
                [f"{name}.{kind}" for name, kind in chain + (frame,)]
            )

        async def run() -> Any:
            _ACTIVE_CHAIN.set(chain + (frame,))
            logger.debug(f"Computing {self.name}.{slot} for dataset {config.dataset_id!r}")
            return await compute(config)

        return await self.cache.run((self.name, slot, config), run)


# =============================================================================
# Static Graph Validation
# =============================================================================


def validate_dependency_graph(
    services: Iterable[SummarizationService[Any]],
) -> List[SummarizationService[Any]]:
    """
    Check that the graph reachable from `services` is acyclic.

    Returns:
        Every reachable service in dependency order (upstream first).

    Raises:
        CyclicDependencyError: With the offending chain of service names.
    """
    ordered: List[SummarizationService[Any]] = []
    done: Dict[int, bool] = {}
    path: List[SummarizationService[Any]] = []

    def visit(service: SummarizationService[Any]) -> None:
        if done.get(id(service)):
            return
        if any(service is active for active in path):
            start = next(i for i, active in enumerate(path) if active is service)
            raise CyclicDependencyError(
                [active.name for active in path[start:]] + [service.name]
            )

        path.append(service)
        for upstream in service.dependencies:
            visit(upstream)
        path.pop()

        done[id(service)] = True
        ordered.append(service)

    for service in services:
        visit(service)

    return ordered
