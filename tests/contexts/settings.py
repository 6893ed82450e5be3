from mediastack.core.config import Config
from mediastack.settings.loader import load_settings
from mediastack.settings.settings_types import Settings

from contexts.stack_tree import StackTree


def loaded_settings(tree: StackTree, variant: str | None = None) -> Settings:
    return load_settings(tree.config_dir, variant=variant, environ={})


def quick_config(**overrides) -> Config:
    environ = {
        'MEDIASTACK_SETTLE_DELAY': '0',
        'MEDIASTACK_VERIFY_DELAY': '0',
        'MEDIASTACK_QUERY_TIMEOUT': '5',
        'MEDIASTACK_LONG_TIMEOUT': '10',
    }
    environ.update(overrides)
    return Config(environ)
