from mediastack.errors.base import StackError


class ConfigurationError(StackError):
    ...
