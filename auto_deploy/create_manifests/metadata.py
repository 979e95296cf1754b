from dataclasses import dataclass
from ..models import GitlabSpec, ChartInfo, Values
from .models import *


@dataclass(frozen=True)
class ResourceMetadata:
    labels: dict[str, str]
    annotations: dict[str, str]
    template_labels: dict[str, str]
    template_annotations: dict[str, str]


def _app_label(identity: ResourceIdentity) -> dict[str, str]:
    # worker resources are never tagged with `app`
    if identity.tier == Tier.WEB:
        return {APP_LABEL: identity.base_name}
    return {}


def get_resource_annotations(gitlab: GitlabSpec) -> dict[str, str]:
    return {
        GITLAB_APP_ANNOTATION: gitlab.app,
        GITLAB_ENV_ANNOTATION: gitlab.env,
    }


def get_template_annotations(gitlab: GitlabSpec, secret_checksum: str) -> dict[str, str]:
    return get_resource_annotations(gitlab) | {SECRETS_CHECKSUM_ANNOTATION: secret_checksum}


def get_template_labels(identity: ResourceIdentity) -> dict[str, str]:
    return _app_label(identity) | {
        RELEASE_LABEL: identity.release,
        TIER_LABEL: identity.tier.value,
        TRACK_LABEL: identity.track,
    }


def get_resource_labels(identity: ResourceIdentity, chart: ChartInfo) -> dict[str, str]:
    return _app_label(identity) | {
        CHART_LABEL: chart.identity,
        HERITAGE_LABEL: HERITAGE,
        RELEASE_LABEL: identity.release,
        TIER_LABEL: identity.tier.value,
        TRACK_LABEL: identity.track,
    }


def get_network_policy_labels(release: str, chart: ChartInfo) -> dict[str, str]:
    # `app` carries the release name here, not the resource base name
    return {
        APP_LABEL: release,
        CHART_LABEL: chart.identity,
        RELEASE_LABEL: release,
        HERITAGE_LABEL: HERITAGE,
    }


def build_metadata(identity: ResourceIdentity, values: Values, chart: ChartInfo) -> ResourceMetadata:
    return ResourceMetadata(
        labels=get_resource_labels(identity, chart),
        annotations=get_resource_annotations(values.gitlab),
        template_labels=get_template_labels(identity),
        template_annotations=get_template_annotations(values.gitlab, values.application.secret_checksum),
    )
