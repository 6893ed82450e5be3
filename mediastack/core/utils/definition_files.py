from pathlib import Path

import yaml

from mediastack.errors.runtime import DefinitionError


def read_dc_file(filename: str | Path) -> dict:
    with open(filename) as f:
        return yaml.load(f, Loader=yaml.FullLoader)


def get_definition_services(filename: str | Path) -> list[str]:
    try:
        dc_cfg = read_dc_file(filename)
    except OSError as e:
        raise DefinitionError(f"Can't read stack definition {filename}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise DefinitionError(f'Stack definition {filename} is not valid yaml:\n{e}') from e

    if not isinstance(dc_cfg, dict) or not isinstance(dc_cfg.get('services'), dict):
        raise DefinitionError(f'Stack definition {filename} has no "services" section')

    return list(dc_cfg['services'])
