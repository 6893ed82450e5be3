from pathlib import Path
from types import MappingProxyType
from typing import Mapping
from typing import NamedTuple

from mediastack.settings.variants import Variant
from mediastack.settings.variants import DEFINITION_FILE_NAME

ENV_FILE_NAME = '.env'
DEFAULT_PROJECT_NAME = 'mediastack'


class Settings(NamedTuple):
    config_dir: Path
    data_root: Path
    media_root: Path
    uid: int
    gid: int
    variant: Variant = Variant.FULL
    project_name: str = DEFAULT_PROJECT_NAME
    timezone: str = 'UTC'
    docker_subnet: str = '172.28.0.0/16'
    docker_gateway: str = '172.28.0.1'
    local_subnet: str = '192.168.0.0/16'
    postgres_password: str = ''
    # every parsed key, for pass-through to compose only
    env: Mapping[str, str] = MappingProxyType({})

    @property
    def env_file(self) -> Path:
        return self.config_dir / ENV_FILE_NAME

    @property
    def stacks_root(self) -> Path:
        return self.config_dir.parent

    @property
    def variant_dir(self) -> Path:
        return self.stacks_root / self.variant.directory

    @property
    def definition_path(self) -> Path:
        return self.variant_dir / DEFINITION_FILE_NAME

    def with_variant(self, variant: Variant | str) -> 'Settings':
        if isinstance(variant, str):
            variant = Variant.parse(variant)
        return self._replace(variant=variant)

    def problems(self) -> list[str]:
        problems = []
        if not self.definition_path.is_file():
            problems += [f'Compose file not found: {self.definition_path}']
        return problems

    def __repr__(self):
        return (f'{type(self).__name__}'
                f'(config_dir="{self.config_dir}", '
                f'data_root="{self.data_root}", '
                f'media_root="{self.media_root}", '
                f'uid={self.uid}, gid={self.gid}, '
                f'variant={self.variant}, '
                f'project_name="{self.project_name}")')
