import logging
from dataclasses import dataclass, field
from typing import Any, assert_never
from kubernetes import client
from .models import *
from .metadata import get_network_policy_labels, get_resource_annotations
from ..models import Values
from ..utils import network_policy_name

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisabledNetworkPolicy:
    pass


@dataclass(frozen=True)
class DefaultNetworkPolicy:
    pass


@dataclass(frozen=True)
class CustomNetworkPolicy:
    overlay: dict[str, Any] = field(default_factory=dict)


NetworkPolicyMode = DisabledNetworkPolicy | DefaultNetworkPolicy | CustomNetworkPolicy


def resolve_network_policy_mode(values: Values) -> NetworkPolicyMode:
    network_policy = values.network_policy
    if not network_policy.enabled:
        return DisabledNetworkPolicy()
    overlay = network_policy.spec.to_manifest()
    if overlay:
        return CustomNetworkPolicy(overlay=overlay)
    return DefaultNetworkPolicy()


def create_default_network_policy_spec() -> dict[str, Any]:
    """
    Admits ingress to every pod in the namespace from pods in the same
    namespace and from namespaces managed by gitlab. No egress rules and no
    explicit policy types.
    """
    spec = client.V1NetworkPolicySpec(
        pod_selector=client.V1LabelSelector(match_labels={}),
        ingress=[
            client.V1NetworkPolicyIngressRule(
                _from=[
                    client.V1NetworkPolicyPeer(
                        pod_selector=client.V1LabelSelector(match_labels={})
                    ),
                    client.V1NetworkPolicyPeer(
                        namespace_selector=client.V1LabelSelector(match_labels={
                            MANAGED_BY_SELECTOR_NAME: MANAGED_BY_SELECTOR_VALUE
                        })
                    ),
                ]
            )
        ]
    )
    return client.ApiClient().sanitize_for_serialization(spec)


def create_network_policy_spec(mode: DefaultNetworkPolicy | CustomNetworkPolicy) -> dict[str, Any]:
    spec = create_default_network_policy_spec()
    if isinstance(mode, CustomNetworkPolicy):
        # supplied keys replace the defaults as-is, the rest are kept
        spec = spec | mode.overlay
    return spec


def create_network_policy(args: ManifestArguments, mode: DefaultNetworkPolicy | CustomNetworkPolicy) -> dict[str, Any]:
    network_policy = client.V1NetworkPolicy(
        api_version="networking.k8s.io/v1",
        kind="NetworkPolicy",
        metadata=client.V1ObjectMeta(
            name=network_policy_name(args.base_name),
            labels=get_network_policy_labels(args.release, args.chart),
            annotations=get_resource_annotations(args.values.gitlab)
        ),
        spec=create_network_policy_spec(mode)
    )
    return client.ApiClient().sanitize_for_serialization(network_policy)


def create_network_policy_manifests(args: ManifestArguments) -> list[dict[str, Any]]:
    mode = resolve_network_policy_mode(args.values)
    _LOGGER.debug("Network policy mode: %s", type(mode).__name__)

    if isinstance(mode, DisabledNetworkPolicy):
        return []
    if isinstance(mode, (DefaultNetworkPolicy, CustomNetworkPolicy)):
        return [create_network_policy(args, mode)]
    assert_never(mode)
