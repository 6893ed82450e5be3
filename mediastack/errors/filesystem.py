from pathlib import Path

from mediastack.errors.base import StackError


class FilesystemError(StackError):
    def __init__(self, message: str, path: Path | str):
        super().__init__(f'{message}: {path}')
        self.path = Path(path)
