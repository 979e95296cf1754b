from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class ValuesModel(BaseModel):
    # yaml numbers in string fields (e.g. `command: [sleep, 3600]`) are kept as their text
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True, coerce_numbers_to_str=True)


def empty_to_none(value):
    if value == "":
        return None
    return value


def none_to_empty(value):
    if value is None:
        return ""
    return value


class StrategyType(str, Enum):
    RECREATE = "Recreate"
    ROLLING_UPDATE = "RollingUpdate"


class ImageSecret(ValuesModel):
    name: str


class ImageSpec(ValuesModel):
    repository: str = Field(default="gitlab.example.com/group/project")
    tag: str = Field(default="stable")
    pull_policy: str = Field(default="Always")
    secrets: list[ImageSecret] = Field(default_factory=lambda: [ImageSecret(name="gitlab-registry")])


class ApplicationSpec(ValuesModel):
    secret_name: str | None = None
    # computed by the caller, carried through as-is
    secret_checksum: str = Field(default="")
    database_url: str = Field(default="", alias="database_url")

    @field_validator("secret_name", mode="before")
    @classmethod
    def preprocess_secret_name(cls, value):
        return empty_to_none(value)

    @field_validator("secret_checksum", "database_url", mode="before")
    @classmethod
    def preprocess_strings(cls, value):
        return none_to_empty(value)


class GitlabSpec(ValuesModel):
    app: str = Field(default="")
    env: str = Field(default="")
    env_name: str = Field(default="")
    env_url: str = Field(default="", alias="envURL")

    @field_validator("*", mode="before")
    @classmethod
    def preprocess(cls, value):
        return none_to_empty(value)


class ServiceSpec(ValuesModel):
    name: str = Field(default="web")
    internal_port: int = Field(default=5000)


class ProbeSpec(ValuesModel):
    path: str = Field(default="/")
    scheme: str = Field(default="HTTP")
    initial_delay_seconds: int = Field(default=15)
    timeout_seconds: int = Field(default=15)


class ReadinessProbeSpec(ProbeSpec):
    initial_delay_seconds: int = Field(default=5)
    timeout_seconds: int = Field(default=3)


class ResourceSpec(ValuesModel):
    cpu: str | None = None
    memory: str | None = None


class Resources(ValuesModel):
    limits: ResourceSpec | None = None
    requests: ResourceSpec | None = None


class WorkerSpec(ValuesModel):
    name: str
    command: list[str] = Field(default_factory=list)
    strategy_type: StrategyType | None = None
    replica_count: int | None = None

    @field_validator("strategy_type", mode="before")
    @classmethod
    def preprocess_strategy_type(cls, value):
        return empty_to_none(value)


class NetworkPolicySpecOverlay(ValuesModel):
    """Raw NetworkPolicy spec fields, passed through without interpretation."""
    model_config = ConfigDict(extra="forbid")

    pod_selector: dict[str, Any] | None = None
    policy_types: list[str] | None = None
    ingress: list[dict[str, Any]] | None = None
    egress: list[dict[str, Any]] | None = None

    def to_manifest(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class NetworkPolicySpec(ValuesModel):
    enabled: bool = Field(default=False)
    spec: NetworkPolicySpecOverlay = Field(default_factory=NetworkPolicySpecOverlay)

    @field_validator("spec", mode="before")
    @classmethod
    def preprocess_spec(cls, value):
        if value is None:
            return {}
        return value


class Values(ValuesModel):
    release_override: str | None = None
    replica_count: int = Field(default=1)
    strategy_type: StrategyType | None = None
    image: ImageSpec = Field(default_factory=ImageSpec)
    application: ApplicationSpec = Field(default_factory=ApplicationSpec)
    gitlab: GitlabSpec = Field(default_factory=GitlabSpec)
    service: ServiceSpec = Field(default_factory=ServiceSpec)
    liveness_probe: ProbeSpec = Field(default_factory=ProbeSpec)
    readiness_probe: ReadinessProbeSpec = Field(default_factory=ReadinessProbeSpec)
    resources: Resources = Field(default_factory=Resources)
    # declaration order of the `workers` mapping is kept as list order
    workers: list[WorkerSpec] = Field(default_factory=list)
    network_policy: NetworkPolicySpec = Field(default_factory=NetworkPolicySpec)

    @field_validator("release_override", "strategy_type", mode="before")
    @classmethod
    def preprocess_optional_strings(cls, value):
        return empty_to_none(value)

    @field_validator("workers", mode="before")
    @classmethod
    def preprocess_workers(cls, value):
        if value is None:
            return []
        if isinstance(value, list):
            return value
        if not isinstance(value, dict):
            raise ValueError(f"workers must be a mapping of worker name to worker spec, found {type(value).__name__}")
        workers = []
        for name, spec in value.items():
            name = str(name)
            spec = dict(spec or {})
            if 'name' in spec and spec['name'] != name:
                raise ValueError(f"Worker {name} declares a conflicting name: {spec['name']}")
            spec['name'] = name
            workers.append(spec)
        return workers

    @model_validator(mode="after")
    def validate_workers(self):
        names = [w.name for w in self.workers]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate worker names: {duplicates}")
        return self


class ChartInfo(ValuesModel):
    name: str = Field(default="auto-deploy-app")
    version: str = Field(default="0.4.1")

    @property
    def identity(self) -> str:
        return f"{self.name}-{self.version.replace('+', '_')}"


def validate_values(values: dict) -> Values:
    return Values.model_validate(values)
