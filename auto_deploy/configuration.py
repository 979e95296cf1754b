import os
import logging
from .models import Values, validate_values
from .yaml_tools import load_file, deep_merge, set_value, parse_set_value

_LOGGER = logging.getLogger(__name__)


def parse_bool_env_var(var_name, default=False):
    value = os.getenv(var_name)
    if value is not None:
        value_str = str(value).lower()
        return value_str in ('true', '1') or \
               (value_str.isdigit() and int(value_str) != 0)
    return default


def build_values_dict(values_files: list[str] | None = None, set_values: list[str] | None = None) -> dict:
    """
    Values files are merged in order, later files win. `--set` style
    key=value pairs are applied on top, also in order, and stay strings.
    """
    data: dict = {}
    for fn in values_files or []:
        _LOGGER.debug("Loading values file %s", fn)
        data = deep_merge(data, load_file(fn))

    for pair in set_values or []:
        key, value = parse_set_value(pair)
        set_value(data, key, value)
    return data


def load_values(values_files: list[str] | None = None, set_values: list[str] | None = None) -> Values:
    return validate_values(build_values_dict(values_files, set_values))
