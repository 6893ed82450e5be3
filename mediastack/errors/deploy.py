from mediastack.errors.base import StackError


class DeploymentError(StackError):
    def __init__(self, phase, cause: StackError):
        super().__init__(f'Phase {phase.number} ({phase.title}) failed: {cause.message}')
        self.phase = phase
        self.cause = cause
