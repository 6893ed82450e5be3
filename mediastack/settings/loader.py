import os
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from mediastack.errors.config import ConfigurationError
from mediastack.settings.env_file import parse_env_file
from mediastack.settings.settings_types import DEFAULT_PROJECT_NAME
from mediastack.settings.settings_types import ENV_FILE_NAME
from mediastack.settings.settings_types import Settings
from mediastack.settings.variants import Variant
from mediastack.settings.variants import detect_variant

REQUIRED_KEYS = ('FOLDER_FOR_MEDIA', 'FOLDER_FOR_DATA', 'PUID', 'PGID')

CONFIG_DIR_NAME = 'base-working-files'
FALLBACK_CONFIG_DIR = Path('/docker')


def missing_keys(env: Mapping[str, str], keys) -> list[str]:
    return [key for key in keys if not env.get(key)]


def _get_default(env: Mapping[str, str], key: str, default: str) -> str:
    return env.get(key) or default


def _parse_id(env: Mapping[str, str], key: str) -> int:
    try:
        return int(env[key])
    except ValueError:
        raise ConfigurationError(f'Invalid {key} value: {env[key]!r}') from None


def find_config_dir(cwd: Path | None = None) -> Path:
    if cwd is None:
        cwd = Path.cwd()

    candidates = [
        cwd / CONFIG_DIR_NAME,
        cwd.parent / CONFIG_DIR_NAME,
        FALLBACK_CONFIG_DIR,
    ]
    for candidate in candidates:
        if (candidate / ENV_FILE_NAME).is_file():
            return candidate

    raise ConfigurationError(
        f'Could not find config directory with {ENV_FILE_NAME} file, '
        f'looked in: {[str(candidate) for candidate in candidates]}'
    )


def load_settings(config_dir: Path | str,
                  variant: Variant | str | None = None,
                  environ: Mapping[str, str] = None) -> Settings:
    if environ is None:
        environ = os.environ

    config_dir = Path(config_dir).absolute()
    env = parse_env_file(config_dir / ENV_FILE_NAME, environ)

    if missing := missing_keys(env, REQUIRED_KEYS):
        raise ConfigurationError(f'Missing required environment variables: {missing}')

    if variant is None:
        variant = detect_variant(config_dir.parent)
    elif isinstance(variant, str):
        variant = Variant.parse(variant)

    return Settings(
        config_dir=config_dir,
        data_root=Path(env['FOLDER_FOR_DATA']),
        media_root=Path(env['FOLDER_FOR_MEDIA']),
        uid=_parse_id(env, 'PUID'),
        gid=_parse_id(env, 'PGID'),
        variant=variant,
        project_name=_get_default(env, 'COMPOSE_PROJECT_NAME', DEFAULT_PROJECT_NAME),
        timezone=_get_default(env, 'TIMEZONE', 'UTC'),
        docker_subnet=_get_default(env, 'DOCKER_SUBNET', '172.28.0.0/16'),
        docker_gateway=_get_default(env, 'DOCKER_GATEWAY', '172.28.0.1'),
        local_subnet=_get_default(env, 'LOCAL_SUBNET', '192.168.0.0/16'),
        postgres_password=_get_default(env, 'POSTGRESQL_PASSWORD', ''),
        env=MappingProxyType(dict(env)),
    )
