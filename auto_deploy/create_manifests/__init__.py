import logging
from .models import ManifestArguments
from ..models import Values, ChartInfo
from ..utils import resolve_base_name
from .deployment import create_web_deployment, create_worker_deployments
from .network_policy import create_network_policy_manifests

from typing import Any, Callable

_LOGGER = logging.getLogger(__name__)

MANIFEST_GENERATORS: dict[str, Callable[[ManifestArguments], list[dict[str, Any]]]] = {
    'deployment': lambda args: [create_web_deployment(args)],
    'workers': create_worker_deployments,
    'network-policy': create_network_policy_manifests,
}


def get_manifest_arguments(release: str, values: Values, chart: ChartInfo | None = None) -> ManifestArguments:
    base_name = resolve_base_name(release, values.release_override)
    _LOGGER.debug("Resolved base name %s for release %s", base_name, release)
    return ManifestArguments(
        release=release,
        base_name=base_name,
        values=values,
        chart=chart or ChartInfo()
    )


def create_manifests(release: str, values: Values, chart: ChartInfo | None = None, show_only: list[str] | None = None) -> list[dict[str, Any]]:
    args = get_manifest_arguments(release, values, chart)

    selected = show_only or list(MANIFEST_GENERATORS)
    unknown = [s for s in selected if s not in MANIFEST_GENERATORS]
    if unknown:
        raise ValueError(f"Unknown manifest types: {unknown}")

    manifests = []
    for name, generator in MANIFEST_GENERATORS.items():
        if name in selected:
            manifests += generator(args)

    return manifests
