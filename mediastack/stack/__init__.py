from mediastack.stack.provisioner import FilesystemProvisioner
from mediastack.stack.provisioner import FsAction
from mediastack.stack.provisioner import FsActionKind
from mediastack.stack.provisioner import ProvisionResult
from mediastack.stack.provisioner import missing_config_files
from mediastack.stack.provisioner import missing_directories

__all__ = (
    'FilesystemProvisioner', 'FsAction', 'FsActionKind', 'ProvisionResult',
    'missing_directories', 'missing_config_files',
)
