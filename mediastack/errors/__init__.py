from mediastack.errors.base import StackError
from mediastack.errors.config import ConfigurationError
from mediastack.errors.deploy import DeploymentError
from mediastack.errors.filesystem import FilesystemError
from mediastack.errors.runtime import DefinitionError
from mediastack.errors.runtime import RuntimeInvocationError
from mediastack.errors.runtime import RuntimeTimeoutError

__all__ = (
    'StackError', 'ConfigurationError', 'FilesystemError', 'DefinitionError',
    'RuntimeInvocationError', 'RuntimeTimeoutError', 'DeploymentError',
)
