from mediastack.core.config import Config
from mediastack.core.runtime import ContainerRuntime
from mediastack.deploy import DeploymentPlan
from mediastack.deploy import DeployReport
from mediastack.deploy import StackDeployer
from mediastack.deploy import StackOperations
from mediastack.settings import Settings
from mediastack.settings import Variant
from mediastack.settings import find_config_dir
from mediastack.settings import load_settings
from mediastack.stack import FilesystemProvisioner
from mediastack.version import get_version

__version__ = get_version()
__all__ = (
    'Config', 'Settings', 'Variant', 'load_settings', 'find_config_dir',
    'FilesystemProvisioner', 'ContainerRuntime',
    'StackDeployer', 'StackOperations', 'DeploymentPlan', 'DeployReport',
)
