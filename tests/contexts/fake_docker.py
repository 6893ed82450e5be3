import shlex
import stat
from pathlib import Path
from typing import NamedTuple

from contexts.stack_tree import tmp_dir


class Response(NamedTuple):
    output: str = ''
    exit_code: int = 0
    sleep_s: float = 0


class FakeDocker(NamedTuple):
    binary: Path
    calls_log: Path

    def calls(self) -> list[str]:
        if not self.calls_log.exists():
            return []
        return self.calls_log.read_text().splitlines()


def fake_docker(responses: dict[str, Response] = None, default: Response = Response()) -> FakeDocker:
    """
    Shell script standing in for the docker binary.

    Every invocation appends its arguments to calls.log; the first response whose key
    is a substring of the arguments decides output and exit code, or hangs for sleep_s.
    """
    directory = tmp_dir()
    binary = directory / 'docker'
    calls_log = directory / 'calls.log'

    branches = ''
    for pattern, response in list((responses or {}).items()) + [('', default)]:
        if response.sleep_s:
            # exec, no orphaned child holding the pipes after kill
            branches += f'  *{shlex.quote(pattern)}*)\n    exec sleep {response.sleep_s}\n    ;;\n'
            continue
        branches += (
            f'  *{shlex.quote(pattern)}*)\n'
            f'    printf "%s\\n" {shlex.quote(response.output)}\n'
            f'    exit {response.exit_code}\n'
            f'    ;;\n'
        )

    binary.write_text(
        '#!/bin/sh\n'
        f'echo "$*" >> {shlex.quote(str(calls_log))}\n'
        'case "$*" in\n'
        f'{branches}'
        'esac\n'
    )
    binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return FakeDocker(binary, calls_log)
