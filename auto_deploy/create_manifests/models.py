from dataclasses import dataclass
from enum import Enum
from ..models import Values, ChartInfo

APP_LABEL = 'app'
CHART_LABEL = 'chart'
HERITAGE_LABEL = 'heritage'
RELEASE_LABEL = 'release'
TIER_LABEL = 'tier'
TRACK_LABEL = 'track'

GITLAB_APP_ANNOTATION = 'app.gitlab.com/app'
GITLAB_ENV_ANNOTATION = 'app.gitlab.com/env'
SECRETS_CHECKSUM_ANNOTATION = 'checksum/application-secrets'

MANAGED_BY_SELECTOR_NAME = 'app.gitlab.com/managed_by'
MANAGED_BY_SELECTOR_VALUE = 'gitlab'

HERITAGE = 'Tiller'
STABLE_TRACK = 'stable'


class Tier(str, Enum):
    WEB = 'web'
    WORKER = 'worker'


@dataclass(frozen=True)
class ResourceIdentity:
    name: str
    base_name: str
    release: str
    tier: Tier
    track: str = STABLE_TRACK


@dataclass(frozen=True)
class ManifestArguments:
    release: str
    base_name: str
    values: Values
    chart: ChartInfo

    def web_identity(self) -> ResourceIdentity:
        return ResourceIdentity(
            name=self.base_name,
            base_name=self.base_name,
            release=self.release,
            tier=Tier.WEB)
