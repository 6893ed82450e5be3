from enum import Enum
from pathlib import Path
from typing import NamedTuple

from mediastack.errors.config import ConfigurationError

DEFINITION_FILE_NAME = 'docker-compose.yaml'


class VariantName(NamedTuple):
    short_name: str
    directory: str


class Variant(Enum):
    FULL = VariantName('full', 'full-download-vpn')
    MINI = VariantName('mini', 'mini-download-vpn')
    NO_VPN = VariantName('no-vpn', 'no-download-vpn')

    @property
    def short_name(self) -> str:
        return self.value.short_name

    @property
    def directory(self) -> str:
        return self.value.directory

    @classmethod
    def preference_order(cls) -> list['Variant']:
        return [cls.FULL, cls.MINI, cls.NO_VPN]

    @classmethod
    def parse(cls, name: str) -> 'Variant':
        for variant in cls.preference_order():
            if name in (variant.short_name, variant.directory):
                return variant
        raise ConfigurationError(
            f'Invalid variant: {name!r}, expected one of '
            f'{[variant.short_name for variant in cls.preference_order()]}'
        )

    def __str__(self):
        return self.short_name


def variant_definition_path(stacks_root: Path, variant: Variant) -> Path:
    return stacks_root / variant.directory / DEFINITION_FILE_NAME


def detect_variant(stacks_root: Path) -> Variant:
    for variant in Variant.preference_order():
        if variant_definition_path(stacks_root, variant).is_file():
            return variant
    return Variant.FULL
