import os
import re
from pathlib import Path
from typing import Mapping

from mediastack.errors.config import ConfigurationError

_VARIABLE = re.compile(r'\$\{([^}]*)\}')


def _is_quoted(value: str) -> bool:
    return len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'")


def strip_inline_comment(value: str) -> str:
    for i in range(1, len(value)):
        if value[i] == '#' and value[i - 1] in (' ', '\t'):
            return value[:i - 1].strip()
    return value


def expand_variables(value: str, parsed: Mapping[str, str], environ: Mapping[str, str]) -> str:
    def substitute(match: re.Match) -> str:
        name, with_default, default = match.group(1).partition(':-')
        if with_default:
            return parsed.get(name) or environ.get(name) or default
        if name in parsed:
            return parsed[name]
        return environ.get(name, '')

    return _VARIABLE.sub(substitute, value)


def parse_env_value(raw: str, parsed: Mapping[str, str], environ: Mapping[str, str]) -> str:
    value = raw.strip()
    if _is_quoted(value):
        value = value[1:-1]
    else:
        value = strip_inline_comment(value)
        if _is_quoted(value):
            value = value[1:-1]
    return expand_variables(value, parsed, environ)


def parse_env_lines(lines, environ: Mapping[str, str] = None) -> dict[str, str]:
    """
    Parses KEY=VALUE lines in docker compose .env flavour.

    Later keys may reference earlier ones with ${KEY} or ${KEY:-default}.
    ${KEY} takes an earlier key even when it is empty, else the process environment.
    ${KEY:-default} takes the first non-empty of the earlier key and the process environment,
    else the default.
    """
    if environ is None:
        environ = os.environ

    env: dict[str, str] = {}
    for line in lines:
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        key, sep, raw_value = line.partition('=')
        if not sep:
            continue

        env[key.strip()] = parse_env_value(raw_value, env, environ)
    return env


def parse_env_file(path: Path | str, environ: Mapping[str, str] = None) -> dict[str, str]:
    try:
        with open(path) as f:
            return parse_env_lines(f.read().splitlines(), environ)
    except OSError as e:
        raise ConfigurationError(f"Can't read env file {path}: {e.strerror or e}") from e
