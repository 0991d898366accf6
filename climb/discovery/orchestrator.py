"""Top-level discovery entry point.

discover() resolves the request, picks the structured registry path or the
generic help-text path, and returns the rendered report. Only
ConfigurationError escapes; every probe and listing failure has already
been turned into "no data" by the time a report is built.
"""

import logging
from typing import Callable, Optional, Sequence

from climb.core.config import Settings, get_settings
from climb.discovery.generic import discover_generic
from climb.discovery.routing import is_structured, resolve_request
from climb.discovery.structured import discover_registry
from climb.discovery.types import RenderedReport
from climb.process.executor import CLIExecutor
from climb.process.types import Executor
from climb.registry.client import RegistryClient

logger = logging.getLogger(__name__)

ExecutorFactory = Callable[..., Executor]


def discover(
    argv: Sequence[str],
    settings: Optional[Settings] = None,
    executor_factory: ExecutorFactory = CLIExecutor,
) -> RenderedReport:
    """Discover one level of the target program named by argv.

    Args:
        argv: `[<target>] [<path>...] [--]` tokens.
        settings: defaults to a fresh Settings() from the environment.
        executor_factory: called as `factory(program, default_timeout=...)`.

    Raises:
        ConfigurationError: no target program could be resolved.
    """
    settings = settings or get_settings()
    request = resolve_request(argv, settings)

    if is_structured(request):
        logger.debug("Structured discovery, path=%s", list(request.path))
        client = RegistryClient(
            executor_factory(
                settings.registry_binary,
                default_timeout=settings.registry_timeout_seconds,
            ),
            registry_url=settings.registry_url,
            timeout=settings.registry_timeout_seconds,
        )
        return discover_registry(
            client,
            request.path,
            usage_timeout=settings.usage_timeout_seconds,
        )

    logger.debug("Generic discovery of %s, path=%s", request.target, list(request.path))
    executor = executor_factory(
        request.target,
        default_timeout=settings.help_timeout_seconds,
    )
    return discover_generic(executor, request, timeout=settings.help_timeout_seconds)
