import yaml, re
from typing import Any
from .utils import load_existing_file

def _represent_str(dumper, data):
    """
        configures yaml for dumping multiline strings
        Ref: https://stackoverflow.com/questions/8640959/how-can-i-control-what-scalar-form-pyyaml-uses-for-my-data

        Trailing newlines are not stripped, a string that has them falls back to the default style.
    """

    if data.count('\n') > 0:
        return dumper.represent_scalar('tag:yaml.org,2002:str', data, style='|')
    return dumper.represent_scalar('tag:yaml.org,2002:str', data)

yaml.add_representer(str, _represent_str)

_KEY_PART_PATTERN = re.compile(r'^([^\[\]]+)((?:\[\d+\])*)$')
_INDEX_PATTERN = re.compile(r'\[(\d+)\]')

def load_file(fn) -> dict[str, Any]:
    data = yaml.safe_load(load_existing_file(fn))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Values file {fn} must contain a mapping, found {type(data).__name__}")
    return data

# deep merge two values dictionaries
# nested dicts are merged, anything else from d2 replaces d1, a None in d2 removes the key
def deep_merge(d1, d2):
    result = d1.copy()
    for k, v in d2.items():
        if v is None:
            result.pop(k, None)
            continue
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)
            continue
        result[k] = v
    return result

def parse_key_path(key: str) -> list[str | int]:
    """
    Splits a helm style key path into dict keys and list indices,
    e.g. `workers.worker1.command[0]` -> ['workers', 'worker1', 'command', 0].
    Dots inside a key are escaped with a backslash.
    """
    if not key:
        raise ValueError("Empty key path")

    tokens: list[str | int] = []
    for part in re.split(r'(?<!\\)\.', key):
        m = _KEY_PART_PATTERN.match(part)
        if not m:
            raise ValueError(f"Malformed key path: {key}")
        name, indices = m.groups()
        tokens.append(name.replace('\\.', '.'))
        tokens += [int(i) for i in _INDEX_PATTERN.findall(indices)]
    return tokens

def _pad(current: list, index: int):
    while len(current) <= index:
        current.append(None)

def _descend(current, token: str | int, path: str, create):
    if isinstance(token, int):
        if not isinstance(current, list):
            raise ValueError(f"Conflict at {path}: cannot index into {type(current).__name__}")
        _pad(current, token)
        if current[token] is None:
            current[token] = create()
        return current[token]

    if not isinstance(current, dict):
        raise ValueError(f"Conflict at {path}: cannot set key on {type(current).__name__}")
    if current.get(token) is None:
        current[token] = create()
    return current[token]

def set_value(data: dict[str, Any], key: str, value: Any) -> dict[str, Any]:
    """Sets a value in place by helm style key path, creating intermediate containers."""
    tokens = parse_key_path(key)
    current = data
    for token, next_token in zip(tokens, tokens[1:]):
        create = list if isinstance(next_token, int) else dict
        current = _descend(current, token, key, create)
        if not isinstance(current, create):
            raise ValueError(f"Conflict at {key}: expected {create.__name__}, found {type(current).__name__}")

    leaf = tokens[-1]
    if isinstance(leaf, int):
        _pad(current, leaf)
    current[leaf] = value
    return data

def parse_set_value(s: str) -> tuple[str, str]:
    if '=' not in s:
        raise ValueError(f"Invalid value, expected key=value: {s}")
    key, value = s.split('=', 1)
    return key.strip(), value

def dump_manifests(manifests: list[dict[str, Any]]) -> str:
    manifests_string = ''
    for manifest in manifests:
        manifests_string += '---\n'
        manifests_string += yaml.dump(manifest, default_flow_style=False) + '\n'
    return manifests_string
