import os

DNS_LABEL_MAX_LENGTH = 63


def load_existing_file(fn):
    if os.path.isfile(fn):
        with open(fn, 'r') as f:
            return f.read()
    raise ValueError(f"Could not find file {fn}")


def truncate_dns_label(s: str) -> str:
    # plain prefix cut, no hashing and no trailing '-' trimming
    return s[:DNS_LABEL_MAX_LENGTH]


def resolve_base_name(release: str, name_override: str | None = None) -> str:
    """
    Resource base name for a release. A non-empty override replaces the
    release name before truncation; labels keep using the raw release name.
    """
    name = name_override or release
    return truncate_dns_label(name)


def worker_resource_name(base_name: str, worker_name: str) -> str:
    # the suffixed name is not re-truncated and may exceed the label limit
    return f"{base_name}-{worker_name}"


def network_policy_name(base_name: str) -> str:
    return f"{base_name}-auto-deploy"
