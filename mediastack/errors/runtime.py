from mediastack.errors.base import StackError


class DefinitionError(StackError):
    ...


class RuntimeInvocationError(StackError):
    def __init__(self, operation: str, returncode: int | None = None, output: str = '', reason: str = ''):
        message = f"Can't {operation}"
        if reason:
            message += f': {reason}'
        elif returncode is not None:
            message += f' (exit code {returncode})'
        if output:
            message += f'\n{output}'
        super().__init__(message)
        self.operation = operation
        self.returncode = returncode
        self.output = output


class RuntimeTimeoutError(RuntimeInvocationError):
    def __init__(self, operation: str, timeout: float, output: str = ''):
        super().__init__(operation, output=output, reason=f'timed out after {timeout:g}s')
        self.timeout = timeout
