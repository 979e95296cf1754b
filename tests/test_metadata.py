"""Tests for the label and annotation builders."""

from auto_deploy.create_manifests.metadata import (
    build_metadata,
    get_network_policy_labels,
    get_resource_labels,
    get_template_annotations,
    get_template_labels,
)
from auto_deploy.create_manifests.models import ResourceIdentity, Tier
from auto_deploy.models import ChartInfo, GitlabSpec, Values

WEB = ResourceIdentity(name="app", base_name="app", release="production", tier=Tier.WEB)
WORKER = ResourceIdentity(name="app-sidekiq", base_name="app", release="production", tier=Tier.WORKER)


def test_web_resource_labels() -> None:
    assert get_resource_labels(WEB, ChartInfo()) == {
        "app": "app",
        "chart": "auto-deploy-app-0.4.1",
        "heritage": "Tiller",
        "release": "production",
        "tier": "web",
        "track": "stable",
    }


def test_worker_resource_labels() -> None:
    assert get_resource_labels(WORKER, ChartInfo()) == {
        "chart": "auto-deploy-app-0.4.1",
        "heritage": "Tiller",
        "release": "production",
        "tier": "worker",
        "track": "stable",
    }


def test_template_labels() -> None:
    assert get_template_labels(WEB) == {
        "app": "app",
        "release": "production",
        "tier": "web",
        "track": "stable",
    }
    assert get_template_labels(WORKER) == {
        "release": "production",
        "tier": "worker",
        "track": "stable",
    }


def test_template_annotations_keep_empty_checksum() -> None:
    gitlab = GitlabSpec(app="group/project", env="staging")
    assert get_template_annotations(gitlab, "") == {
        "app.gitlab.com/app": "group/project",
        "app.gitlab.com/env": "staging",
        "checksum/application-secrets": "",
    }


def test_chart_identity() -> None:
    chart = ChartInfo(name="auto-deploy-app", version="1.0.0+build.5")
    assert chart.identity == "auto-deploy-app-1.0.0_build.5"
    assert get_resource_labels(WEB, chart)["chart"] == "auto-deploy-app-1.0.0_build.5"


def test_network_policy_labels() -> None:
    """Network policies use the release name for the app label."""
    assert get_network_policy_labels("production", ChartInfo()) == {
        "app": "production",
        "chart": "auto-deploy-app-0.4.1",
        "release": "production",
        "heritage": "Tiller",
    }


def test_build_metadata() -> None:
    values = Values.model_validate(
        {"gitlab": {"app": "group/project", "env": "prod"}, "application": {"secretChecksum": "deadbeef"}}
    )
    metadata = build_metadata(WORKER, values, ChartInfo())
    assert metadata.annotations == {
        "app.gitlab.com/app": "group/project",
        "app.gitlab.com/env": "prod",
    }
    assert metadata.template_annotations == metadata.annotations | {
        "checksum/application-secrets": "deadbeef"
    }
    assert "app" not in metadata.labels
    assert "app" not in metadata.template_labels
    assert all(key and isinstance(value, str) for key, value in metadata.labels.items())
