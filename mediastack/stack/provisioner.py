import os
import shutil
from pathlib import Path
from typing import Callable
from typing import NamedTuple

from rich.text import Text

from mediastack.errors.filesystem import FilesystemError
from mediastack.output.console import CONSOLE
from mediastack.output.styles import Style
from mediastack.stack.catalogs import CONFIG_FILES
from mediastack.stack.catalogs import CONFIG_MODE
from mediastack.stack.catalogs import CONFIG_PERMISSION_PATTERNS
from mediastack.stack.catalogs import DATA_DIRECTORIES
from mediastack.stack.catalogs import DIRECTORY_MODE
from mediastack.stack.catalogs import MEDIA_DIRECTORIES
from mediastack.stack.catalogs import PARENT_DIRECTORY_MODE
from mediastack.stack.catalogs import SCRIPT_MODE
from mediastack.stack.catalogs import SCRIPT_SUFFIX
from mediastack.stack.catalogs import SPECIAL_FILES


class FsActionKind:
    MKDIR = 'mkdir'
    CHOWN = 'chown'
    CHMOD = 'chmod'
    COPY = 'copy'
    CREATE = 'create'


class FsAction(NamedTuple):
    kind: str
    path: Path
    detail: str = ''

    def __str__(self):
        return f'{self.kind} {self.path} {self.detail}'.rstrip()


class ProvisionResult:
    def __init__(self, planned_directories: set[Path] | None = None):
        self.actions: list[FsAction] = []
        self.warnings: list[str] = []
        # directories a dry run has planned to create, shared by the operations of one run
        self.planned_directories = planned_directories if planned_directories is not None else set()

    def is_planned_directory(self, path: Path) -> bool:
        return any(path == planned or path in planned.parents for planned in self.planned_directories)

    def warn(self, message: str) -> None:
        CONSOLE.print(Text(f'  Warning: {message}', style=Style.suspicious))
        self.warnings += [message]


class FilesystemProvisioner:
    """
    Creates the stack directory layout and stages its configuration files.

    Every mutation is recorded as an FsAction before it is applied, so a dry run
    reports exactly the actions a real run with the same inputs would perform.
    chown failures are warnings; mkdir, copy and chmod failures raise FilesystemError.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def _apply(self, result: ProvisionResult, action: FsAction, dry_run: bool,
               operation: Callable[[], None], fatal: bool = True) -> None:
        result.actions += [action]
        if dry_run:
            if self.verbose:
                CONSOLE.print(Text(f'  [dry-run] Would {action}', style=Style.context))
            return

        try:
            operation()
        except OSError as e:
            if fatal:
                raise FilesystemError(f"Can't {action.kind} {action.detail}".rstrip() + f' ({e.strerror or e})',
                                      action.path) from e
            result.warn(f"Can't {action.kind} {action.path} {action.detail}: {e.strerror or e}")
            return

        if self.verbose:
            CONSOLE.print(Text(f'  {action}', style=Style.context))

    def _chown(self, result: ProvisionResult, path: Path, uid: int, gid: int, dry_run: bool) -> None:
        self._apply(result, FsAction(FsActionKind.CHOWN, path, f'{uid}:{gid}'), dry_run,
                    lambda: os.chown(path, uid, gid), fatal=False)

    def _chmod(self, result: ProvisionResult, path: Path, mode: int, dry_run: bool) -> None:
        self._apply(result, FsAction(FsActionKind.CHMOD, path, oct(mode)), dry_run,
                    lambda: os.chmod(path, mode))

    def _mkdir(self, result: ProvisionResult, path: Path, mode: int, dry_run: bool) -> None:
        if path.is_dir() or (dry_run and result.is_planned_directory(path)):
            return
        self._apply(result, FsAction(FsActionKind.MKDIR, path, oct(mode)), dry_run,
                    lambda: path.mkdir(mode=mode, parents=True, exist_ok=True))
        if dry_run:
            result.planned_directories.add(path)

    def _ensure_directory(self, result: ProvisionResult, path: Path, uid: int, gid: int, dry_run: bool) -> None:
        self._mkdir(result, path, DIRECTORY_MODE & 0o777, dry_run)
        self._chown(result, path, uid, gid, dry_run)
        self._chmod(result, path, DIRECTORY_MODE, dry_run)

    def create_directories(self, data_root: Path, media_root: Path, uid: int, gid: int,
                           dry_run: bool = False,
                           planned_directories: set[Path] | None = None) -> ProvisionResult:
        CONSOLE.print(Text(f'  Data folder: {data_root}', style=Style.regular))
        CONSOLE.print(Text(f'  Media folder: {media_root}', style=Style.regular))
        CONSOLE.print(Text(f'  UID:GID: {uid}:{gid}', style=Style.regular))

        result = ProvisionResult(planned_directories)
        for directory in DATA_DIRECTORIES:
            self._ensure_directory(result, Path(data_root) / directory, uid, gid, dry_run)
        for directory in MEDIA_DIRECTORIES:
            self._ensure_directory(result, Path(media_root) / directory, uid, gid, dry_run)

        created = len([action for action in result.actions if action.kind == FsActionKind.MKDIR])
        CONSOLE.print(Text(
            f'  {"Would create" if dry_run else "Created"} {created} of '
            f'{len(DATA_DIRECTORIES) + len(MEDIA_DIRECTORIES)} directories',
            style=Style.good
        ))
        return result

    def stage_config_files(self, config_dir: Path, data_root: Path, uid: int, gid: int,
                           dry_run: bool = False,
                           planned_directories: set[Path] | None = None) -> ProvisionResult:
        result = ProvisionResult(planned_directories)

        for config_file in CONFIG_FILES:
            src = Path(config_dir) / config_file.source
            dst = Path(data_root) / config_file.destination

            if not src.is_file():
                result.warn(f'Source file not found: {src}')
                continue

            self._mkdir(result, dst.parent, PARENT_DIRECTORY_MODE, dry_run)
            self._apply(result, FsAction(FsActionKind.COPY, dst, f'from {src}'), dry_run,
                        lambda: shutil.copyfile(src, dst))
            self._chmod(result, dst, config_file.mode, dry_run)
            self._chown(result, dst, uid, gid, dry_run)

        for special_file in SPECIAL_FILES:
            path = Path(data_root) / special_file.path

            if special_file.create and not path.exists():
                self._mkdir(result, path.parent, PARENT_DIRECTORY_MODE, dry_run)
                self._apply(result, FsAction(FsActionKind.CREATE, path), dry_run,
                            lambda: path.touch(mode=special_file.mode, exist_ok=True))

            self._chmod(result, path, special_file.mode, dry_run)
            self._chown(result, path, uid, gid, dry_run)

        copied = len([action for action in result.actions if action.kind == FsActionKind.COPY])
        CONSOLE.print(Text(
            f'  {"Would copy" if dry_run else "Copied"} {copied} of {len(CONFIG_FILES)} configuration files',
            style=Style.good
        ))
        return result

    def set_config_permissions(self, config_dir: Path, uid: int, gid: int, dry_run: bool = False) -> ProvisionResult:
        result = ProvisionResult()

        matches = []
        for pattern in CONFIG_PERMISSION_PATTERNS:
            for match in sorted(Path(config_dir).glob(pattern)):
                if match not in matches:
                    matches += [match]

        for match in matches:
            mode = SCRIPT_MODE if match.suffix == SCRIPT_SUFFIX else CONFIG_MODE
            self._chmod(result, match, mode, dry_run)
            self._chown(result, match, uid, gid, dry_run)

        return result


def missing_directories(data_root: Path, media_root: Path) -> list[Path]:
    return [
        path
        for path in [Path(data_root) / directory for directory in DATA_DIRECTORIES]
                    + [Path(media_root) / directory for directory in MEDIA_DIRECTORIES]
        if not path.exists()
    ]


def missing_config_files(config_dir: Path) -> list[str]:
    return [
        config_file.source
        for config_file in CONFIG_FILES
        if not (Path(config_dir) / config_file.source).exists()
    ]
