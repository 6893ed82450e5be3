from dataclasses import dataclass
from dataclasses import field

from rich.text import Text

from mediastack.core.compose_data_types import ContainersState
from mediastack.core.config import Config
from mediastack.core.runtime import ContainerRuntime
from mediastack.errors.base import StackError
from mediastack.errors.config import ConfigurationError
from mediastack.helpers.jobs_result import JobOutcome
from mediastack.output.console import CONSOLE
from mediastack.output.styles import Style
from mediastack.settings.loader import missing_keys
from mediastack.settings.settings_types import Settings
from mediastack.stack.provisioner import missing_config_files
from mediastack.stack.provisioner import missing_directories

VALIDATION_REQUIRED_KEYS = ('FOLDER_FOR_MEDIA', 'FOLDER_FOR_DATA', 'PUID', 'PGID', 'TIMEZONE')
RECOMMENDED_KEYS = ('CLOUDFLARE_ZONE', 'CLOUDFLARE_EMAIL')


@dataclass
class ValidationReport:
    strict: bool = False
    outcome: JobOutcome = field(default_factory=JobOutcome)
    services_count: int | None = None

    @property
    def errors(self) -> list[str]:
        return self.outcome.errors

    @property
    def warnings(self) -> list[str]:
        return self.outcome.warnings

    @property
    def passed(self) -> bool:
        if self.outcome.is_fatal:
            return False
        return not (self.strict and self.warnings)

    def as_json(self) -> dict:
        return {
            'passed': self.passed,
            'strict': self.strict,
            'services': self.services_count,
            'errors': self.errors,
            'warnings': self.warnings,
        }


class StackOperations:
    """Single-purpose stack commands: stop, restart, pull, status, logs, exec and validate."""

    def __init__(self, settings: Settings, config: Config, runtime: ContainerRuntime = None):
        self.settings = settings
        self.config = config
        self.runtime = runtime
        if self.runtime is None:
            self.runtime = ContainerRuntime(settings, config)

    async def stop(self, services: list[str] = (), remove_volumes: bool = False, remove_orphans: bool = True,
                   prune: bool = False, dry_run: bool = False) -> JobOutcome:
        outcome = JobOutcome()
        if dry_run:
            CONSOLE.print(Text(f'[dry-run] Would stop {", ".join(services) or self.settings.project_name}',
                               style=Style.context))
            if prune:
                CONSOLE.print(Text('[dry-run] Would prune unused resources', style=Style.context))
            return outcome

        if services:
            for service in services:
                CONSOLE.print(Text(f'Stopping service: {service}', style=Style.info))
                await self.runtime.stop_one(service)
                CONSOLE.print(Text(f'Stopped: {service}', style=Style.good))
        else:
            await self.runtime.tear_down(remove_volumes=remove_volumes, remove_orphans=remove_orphans)

        if prune:
            CONSOLE.print(Text('Pruning unused resources...', style=Style.info))
            await self.runtime.reclaim(outcome)

        CONSOLE.print(Text(f'{self.settings.project_name} stopped', style=Style.good))
        return outcome

    async def restart(self, services: list[str] = (), pull: bool = False, force: bool = False,
                      dry_run: bool = False) -> None:
        if dry_run:
            CONSOLE.print(Text(f'[dry-run] Would restart {", ".join(services) or self.settings.project_name}',
                               style=Style.context))
            if pull:
                CONSOLE.print(Text('[dry-run] Would pull images first', style=Style.context))
            return

        if pull:
            CONSOLE.print(Text('Pulling images...', style=Style.info))
            await self.runtime.pull_all()

        if services:
            for service in services:
                CONSOLE.print(Text(f'Restarting service: {service}', style=Style.info))
                await self.runtime.restart_one(service)
                CONSOLE.print(Text(f'Restarted: {service}', style=Style.good))
        elif force:
            CONSOLE.print(Text('Force recreating all containers...', style=Style.info))
            await self.runtime.tear_down(remove_volumes=False, remove_orphans=True)
            await self.runtime.bring_up(detach=True)
        else:
            await self.runtime.restart_all()

        CONSOLE.print(Text(f'{self.settings.project_name} restarted', style=Style.good))

    async def pull(self, services: list[str] = (), dry_run: bool = False) -> None:
        if dry_run:
            CONSOLE.print(Text('[dry-run] Would pull images', style=Style.context))
            return

        if services:
            for service in services:
                CONSOLE.print(Text(f'Pulling image for: {service}', style=Style.info))
                await self.runtime.pull_one(service)
        else:
            await self.runtime.pull_all()
        CONSOLE.print(Text('Images pulled', style=Style.good))

    async def status(self, include_stopped: bool = False) -> ContainersState:
        containers = await self.runtime.list_containers(include_stopped=include_stopped)
        CONSOLE.print(containers.as_rich_text())
        CONSOLE.print(Text(f'  {containers.running} running, {containers.stopped} stopped, '
                           f'{containers.healthy} healthy, {containers.unhealthy} unhealthy', style=Style.context))
        return containers

    async def logs(self, service: str | None = None, follow: bool = False, tail: str | None = '100',
                   timestamps: bool = False) -> None:
        await self.runtime.stream_logs(service, follow=follow, tail=tail, timestamps=timestamps)

    async def exec(self, service: str, command: list[str], interactive: bool = False) -> None:
        await self.runtime.exec_in_service(service, command, interactive=interactive)

    async def validate(self, strict: bool = False) -> ValidationReport:
        report = ValidationReport(strict=strict)
        outcome = report.outcome
        settings = self.settings
        style = Style()

        CONSOLE.print(Text(f'Validating {settings.project_name} configuration', style=style.info))

        CONSOLE.print(Text('Checking configuration...', style=style.regular))
        for problem in settings.problems():
            outcome.fail(ConfigurationError(problem))

        CONSOLE.print(Text('Checking Docker daemon...', style=style.regular))
        await self._check(outcome, self.runtime.ping(), 'Docker daemon is running')

        CONSOLE.print(Text('Checking Docker Compose...', style=style.regular))
        await self._check(outcome, self.runtime.compose_version(), 'Docker Compose is installed')

        CONSOLE.print(Text('Validating stack definition...', style=style.regular))
        services = await self._check(outcome, self.runtime.validate_definition(), 'Stack definition is valid')
        if services is not None:
            report.services_count = len(services)
            CONSOLE.print(Text(f'  Found {len(services)} services', style=style.good))

        CONSOLE.print(Text('Checking configuration files...', style=style.regular))
        missing_files = missing_config_files(settings.config_dir)
        for missing_file in missing_files:
            outcome.warn(f'Missing config file: {missing_file}')
        if not missing_files:
            CONSOLE.print(Text('  All configuration files present', style=style.good))

        CONSOLE.print(Text('Checking directory structure...', style=style.regular))
        missing_dirs = missing_directories(settings.data_root, settings.media_root)
        if missing_dirs:
            outcome.warn(f'{len(missing_dirs)} directories need to be created')
            if self.config.verbose:
                for missing_dir in missing_dirs:
                    CONSOLE.print(Text(f'    - {missing_dir}', style=style.context))
        else:
            CONSOLE.print(Text('  All directories exist', style=style.good))

        CONSOLE.print(Text('Checking environment variables...', style=style.regular))
        missing_required = missing_keys(settings.env, VALIDATION_REQUIRED_KEYS)
        for key in missing_required:
            outcome.fail(ConfigurationError(f'Missing required variable: {key}'))
        if not missing_required:
            CONSOLE.print(Text('  Required environment variables are set', style=style.good))
        for key in missing_keys(settings.env, RECOMMENDED_KEYS):
            outcome.warn(f'Recommended variable not set: {key}')

        if outcome.is_fatal:
            CONSOLE.print(Text('Validation failed with errors', style=style.bad))
        elif not report.passed:
            CONSOLE.print(Text('Validation failed (strict mode): warnings found', style=style.suspicious))
        elif report.warnings:
            CONSOLE.print(Text('Validation passed with warnings', style=style.suspicious))
        else:
            CONSOLE.print(Text('Validation passed', style=style.good))
        return report

    async def _check(self, outcome: JobOutcome, call, success_message: str):
        try:
            result = await call
        except StackError as e:
            outcome.fail(e)
            return None
        CONSOLE.print(Text(f'  {success_message}', style=Style.good))
        return result
