from enum import Enum
from enum import auto
from typing import Awaitable
from typing import NamedTuple
from typing import TypeVar

from rich.text import Text

from mediastack.errors.base import StackError
from mediastack.output.console import CONSOLE
from mediastack.output.styles import Style

T = TypeVar('T')


class Severity(Enum):
    FATAL = auto()
    WARNING = auto()


class Issue(NamedTuple):
    severity: Severity
    message: str
    error: StackError | None = None


class JobOutcome:
    """
    Issues collected by one unit of work.

    Fatal calls are awaited directly and raise; best-effort calls go through attempt(),
    which turns a StackError into a warning and lets the work continue.
    """

    def __init__(self):
        self.issues: list[Issue] = []

    def warn(self, message: str, error: StackError | None = None) -> None:
        CONSOLE.print(Text(f'  Warning: {message}', style=Style.suspicious))
        self.issues += [Issue(Severity.WARNING, message, error)]

    def fail(self, error: StackError) -> None:
        CONSOLE.print(Text(f'  Error: {error.message}', style=Style.bad))
        self.issues += [Issue(Severity.FATAL, error.message, error)]

    async def attempt(self, description: str, call: Awaitable[T]) -> T | None:
        try:
            return await call
        except StackError as e:
            self.warn(f'{description}: {e.message}', e)
            return None

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == Severity.WARNING]

    @property
    def errors(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == Severity.FATAL]

    @property
    def fatal(self) -> Issue | None:
        for issue in self.issues:
            if issue.severity == Severity.FATAL:
                return issue
        return None

    @property
    def is_fatal(self) -> bool:
        return self.fatal is not None
