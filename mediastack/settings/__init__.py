from mediastack.settings.env_file import parse_env_file
from mediastack.settings.loader import find_config_dir
from mediastack.settings.loader import load_settings
from mediastack.settings.settings_types import Settings
from mediastack.settings.variants import Variant
from mediastack.settings.variants import detect_variant

__all__ = (
    'Settings', 'Variant', 'load_settings', 'find_config_dir', 'parse_env_file', 'detect_variant',
)
