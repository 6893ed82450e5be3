import asyncio
import shlex
import sys
from asyncio import subprocess

from rich.text import Text

from mediastack.core.config import Config
from mediastack.core.utils.process_command_output import collect_process_output
from mediastack.errors.runtime import RuntimeInvocationError
from mediastack.errors.runtime import RuntimeTimeoutError
from mediastack.output.console import CONSOLE
from mediastack.output.styles import Style
from mediastack.settings.settings_types import Settings


class ComposeShellInterface:
    """
    docker compose command line bound to one definition file, env file and project name.

    Output handling:
      captured - buffered and returned, echoed only in verbose mode (config, ps, version)
      streamed - echoed live and buffered for error reports (pull, up, down, stop, restart)
      attached - caller's stdin/stdout/stderr, no timeout (logs, exec)
    """

    def __init__(self, settings: Settings, config: Config):
        self.settings = settings
        self.docker_binary = config.docker_binary
        self.verbose = config.verbose
        self.long_timeout = config.long_timeout_s
        self.query_timeout = config.query_timeout_s

    def _compose_command(self, *args: str) -> list[str]:
        return [
            self.docker_binary, 'compose',
            '-f', str(self.settings.definition_path),
            '--env-file', str(self.settings.env_file),
            '-p', self.settings.project_name,
            *args,
        ]

    async def _run(self, operation: str, cmd: list[str], timeout: float, echo: bool) -> str:
        sys.stdout.flush()
        CONSOLE.print(Text(shlex.join(cmd), style=Style.context))

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=self.settings.config_dir,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            raise RuntimeInvocationError(operation, reason=str(e)) from e

        try:
            output = await collect_process_output(process, echo, timeout)
        except asyncio.TimeoutError:
            raise RuntimeTimeoutError(operation, timeout) from None

        if process.returncode != 0:
            raise RuntimeInvocationError(operation, process.returncode, output.text())

        return output.stdout.decode('utf-8', errors='replace')

    async def _captured(self, operation: str, cmd: list[str]) -> str:
        return await self._run(operation, cmd, self.query_timeout, self.verbose)

    async def _streamed(self, operation: str, cmd: list[str]) -> str:
        return await self._run(operation, cmd, self.long_timeout, True)

    async def _attached(self, operation: str, cmd: list[str]) -> None:
        sys.stdout.flush()
        CONSOLE.print(Text(shlex.join(cmd), style=Style.context))

        try:
            process = await asyncio.create_subprocess_exec(*cmd, cwd=self.settings.config_dir)
        except OSError as e:
            raise RuntimeInvocationError(operation, reason=str(e)) from e

        try:
            await process.wait()
        except asyncio.CancelledError:
            if process.returncode is None:
                process.terminate()
                await process.wait()
            raise

        if process.returncode != 0:
            raise RuntimeInvocationError(operation, process.returncode)

    async def dc_config(self) -> None:
        await self._captured('validate stack definition', self._compose_command('config', '--quiet'))

    async def dc_config_services(self) -> list[str]:
        output = await self._captured('list defined services', self._compose_command('config', '--services'))
        return [line.strip() for line in output.splitlines() if line.strip()]

    async def dc_pull(self, services: list[str]) -> None:
        operation = f'pull images for {services}' if services else 'pull images'
        await self._streamed(operation, self._compose_command('pull', *services))

    async def dc_up(self, detach: bool = True, force_recreate: bool = False) -> None:
        args = ['up']
        if detach:
            args += ['-d']
        if force_recreate:
            args += ['--force-recreate']
        args += ['--remove-orphans']

        if detach:
            await self._streamed('start services', self._compose_command(*args))
        else:
            await self._attached('start services', self._compose_command(*args))

    async def dc_down(self, remove_volumes: bool = False, remove_orphans: bool = False) -> None:
        args = ['down']
        if remove_volumes:
            args += ['-v']
        if remove_orphans:
            args += ['--remove-orphans']
        await self._streamed('tear down services', self._compose_command(*args))

    async def dc_stop(self, services: list[str]) -> None:
        operation = f'stop {services}' if services else 'stop services'
        await self._streamed(operation, self._compose_command('stop', *services))

    async def dc_restart(self, services: list[str]) -> None:
        operation = f'restart {services}' if services else 'restart services'
        await self._streamed(operation, self._compose_command('restart', *services))

    async def dc_logs(self, service: str | None, follow: bool, tail: str | None, timestamps: bool) -> None:
        args = ['logs']
        if follow:
            args += ['-f']
        if tail:
            args += ['--tail', str(tail)]
        if timestamps:
            args += ['-t']
        if service:
            args += [service]
        await self._attached(f'get {service or "services"} logs', self._compose_command(*args))

    async def dc_exec(self, service: str, command: list[str], interactive: bool = False) -> None:
        args = ['exec']
        if interactive:
            args += ['-it']
        args += [service, *command]
        await self._attached(f'execute {shlex.join(command)} in {service}', self._compose_command(*args))

    async def dc_ps_ids(self, service: str) -> list[str]:
        output = await self._captured(f'get {service} container', self._compose_command('ps', '-q', service))
        return [line.strip() for line in output.splitlines() if line.strip()]

    async def compose_version(self) -> str:
        output = await self._captured('get docker compose version', [self.docker_binary, 'compose', 'version'])
        return output.strip()
