import logging
from .models import *
from .metadata import build_metadata
from ..models import Values, WorkerSpec, StrategyType, ProbeSpec
from ..utils import worker_resource_name
from typing import Any
from kubernetes import client

_LOGGER = logging.getLogger(__name__)


def get_strategy(strategy_type: StrategyType | None) -> client.V1DeploymentStrategy | None:
    # unset leaves the platform default in place
    if strategy_type is None:
        return None
    return client.V1DeploymentStrategy(type=strategy_type.value)


def get_worker_strategy_type(values: Values, worker: WorkerSpec) -> StrategyType | None:
    return worker.strategy_type or values.strategy_type


def create_container_environment(values: Values) -> list[client.V1EnvVar]:
    return [
        client.V1EnvVar(name='DATABASE_URL', value=values.application.database_url),
        client.V1EnvVar(name='GITLAB_ENVIRONMENT_NAME', value=values.gitlab.env_name),
        client.V1EnvVar(name='GITLAB_ENVIRONMENT_URL', value=values.gitlab.env_url),
    ]


def create_container_env_from(values: Values) -> list[client.V1EnvFromSource] | None:
    if not values.application.secret_name:
        return None
    return [client.V1EnvFromSource(
        secret_ref=client.V1SecretEnvSource(name=values.application.secret_name)
    )]


def create_container_resources(values: Values) -> client.V1ResourceRequirements | None:
    resources_dict = {}
    if values.resources.limits:
        resources_dict['limits'] = values.resources.limits.model_dump(exclude_none=True)
    if values.resources.requests:
        resources_dict['requests'] = values.resources.requests.model_dump(exclude_none=True)
    return client.V1ResourceRequirements(**resources_dict) if resources_dict else None


def create_http_probe(probe: ProbeSpec, port: int) -> client.V1Probe:
    return client.V1Probe(
        http_get=client.V1HTTPGetAction(
            path=probe.path,
            scheme=probe.scheme,
            port=port
        ),
        initial_delay_seconds=probe.initial_delay_seconds,
        timeout_seconds=probe.timeout_seconds
    )


def create_container(args: ManifestArguments, name: str) -> client.V1Container:
    values = args.values
    return client.V1Container(
        name=name,
        image=f"{values.image.repository}:{values.image.tag}",
        image_pull_policy=values.image.pull_policy,
        env_from=create_container_env_from(values),
        env=create_container_environment(values),
        resources=create_container_resources(values)
    )


def create_deployment(args: ManifestArguments,
    identity: ResourceIdentity,
    container: client.V1Container,
    replicas: int,
    strategy_type: StrategyType | None) -> dict[str, Any]:
    metadata = build_metadata(identity, args.values, args.chart)

    image_pull_secrets = [client.V1LocalObjectReference(name=s.name) for s in args.values.image.secrets]

    # Create pod template spec
    pod_template = client.V1PodTemplateSpec(
        metadata=client.V1ObjectMeta(
            labels=metadata.template_labels,
            annotations=metadata.template_annotations
        ),
        spec=client.V1PodSpec(
            image_pull_secrets=image_pull_secrets or None,
            containers=[container]
        ),
    )

    # Create deployment spec
    deployment_spec = client.V1DeploymentSpec(
        replicas=replicas,
        # workers share one selector (release, tier, track) since they carry no app label
        selector=client.V1LabelSelector(match_labels=dict(metadata.template_labels)),
        template=pod_template,
        strategy=get_strategy(strategy_type)
    )

    # Create deployment
    deployment = client.V1Deployment(
        api_version='apps/v1',
        kind='Deployment',
        metadata=client.V1ObjectMeta(
            name=identity.name,
            labels=metadata.labels,
            annotations=metadata.annotations
        ),
        spec=deployment_spec
    )
    return client.ApiClient().sanitize_for_serialization(deployment)


def create_web_deployment(args: ManifestArguments) -> dict[str, Any]:
    values = args.values
    port = values.service.internal_port

    container = create_container(args, args.chart.name)
    container.ports = [client.V1ContainerPort(
        name=values.service.name,
        container_port=port
    )]
    container.liveness_probe = create_http_probe(values.liveness_probe, port)
    container.readiness_probe = create_http_probe(values.readiness_probe, port)

    return create_deployment(args, args.web_identity(), container, values.replica_count, values.strategy_type)


def create_worker_deployments(args: ManifestArguments) -> list[dict[str, Any]]:
    manifests = []
    values = args.values

    for worker in values.workers:
        identity = ResourceIdentity(
            name=worker_resource_name(args.base_name, worker.name),
            base_name=args.base_name,
            release=args.release,
            tier=Tier.WORKER)

        container = create_container(args, f"{args.chart.name}-{worker.name}")
        # passed through verbatim, an empty command stays an empty list
        container.command = list(worker.command)

        replicas = worker.replica_count if worker.replica_count is not None else values.replica_count
        strategy_type = get_worker_strategy_type(values, worker)

        _LOGGER.debug("Generating worker deployment %s (strategy: %s)", identity.name, strategy_type)
        manifests.append(create_deployment(args, identity, container, replicas, strategy_type))

    return manifests
