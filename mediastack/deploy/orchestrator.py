from pathlib import Path

from rich.text import Text

from mediastack.core.config import Config
from mediastack.core.runtime import ContainerRuntime
from mediastack.deploy.phases import DeployReport
from mediastack.deploy.phases import DeploymentPlan
from mediastack.deploy.phases import Phase
from mediastack.deploy.phases import PhaseRecord
from mediastack.deploy.phases import PhaseStatus
from mediastack.deploy.phases import PROVISIONING_PHASES
from mediastack.deploy.verification import verify_services
from mediastack.errors.base import StackError
from mediastack.helpers.jobs_result import JobOutcome
from mediastack.output.console import CONSOLE
from mediastack.output.styles import Style
from mediastack.settings.settings_types import Settings
from mediastack.stack.provisioner import FilesystemProvisioner
from mediastack.stack.provisioner import ProvisionResult


class StackDeployer:
    """
    Deploys the stack in nine ordered phases:

    1. create data and media directories
    2. normalize permissions of the config directory
    3. stage configuration files into the data folder
       (a dry run stops here and reports the rest as planned)
    4. validate the stack definition
    5. pull images
    6. stop running containers of the project and prune what they leave behind
    7. bring the stack up
    8. verify expected services are running
    9. prune unused images

    Phases 1, 3, 5 and 9 follow the DeploymentPlan switches. A StackError in a fatal phase
    marks it failed and ends the run; phases 6 and 9 only record warnings; phase 8 never fails.
    """

    def __init__(self,
                 settings: Settings,
                 config: Config,
                 runtime: ContainerRuntime = None,
                 provisioner: FilesystemProvisioner = None):
        self.settings = settings
        self.config = config
        self.runtime = runtime
        if self.runtime is None:
            self.runtime = ContainerRuntime(settings, config)
        self.provisioner = provisioner
        if self.provisioner is None:
            self.provisioner = FilesystemProvisioner(verbose=config.verbose)

    def _provisioning_record(self, phase: Phase, result: ProvisionResult, dry_run: bool) -> PhaseRecord:
        if dry_run:
            status = PhaseStatus.PLANNED
        elif result.warnings:
            status = PhaseStatus.WARNED
        else:
            status = PhaseStatus.DONE
        return PhaseRecord(phase, status, warnings=list(result.warnings), actions=list(result.actions))

    async def _run_phase(self, phase: Phase, plan: DeploymentPlan, planned_directories: set[Path]) -> PhaseRecord:
        settings = self.settings
        match phase:
            case Phase.CREATE_DIRECTORIES:
                result = self.provisioner.create_directories(
                    settings.data_root, settings.media_root, settings.uid, settings.gid, dry_run=plan.dry_run,
                    planned_directories=planned_directories,
                )
                return self._provisioning_record(phase, result, plan.dry_run)

            case Phase.CONFIG_PERMISSIONS:
                result = self.provisioner.set_config_permissions(
                    settings.config_dir, settings.uid, settings.gid, dry_run=plan.dry_run
                )
                return self._provisioning_record(phase, result, plan.dry_run)

            case Phase.STAGE_FILES:
                result = self.provisioner.stage_config_files(
                    settings.config_dir, settings.data_root, settings.uid, settings.gid, dry_run=plan.dry_run,
                    planned_directories=planned_directories,
                )
                return self._provisioning_record(phase, result, plan.dry_run)

            case Phase.VALIDATE:
                services = await self.runtime.validate_definition()
                CONSOLE.print(Text(f'  Stack definition is valid: {len(services)} services', style=Style.good))
                return PhaseRecord(phase, PhaseStatus.DONE, details={'services': list(services)})

            case Phase.PULL:
                await self.runtime.pull_all()
                return PhaseRecord(phase, PhaseStatus.DONE)

            case Phase.TEARDOWN:
                return await self._teardown(phase)

            case Phase.BRING_UP:
                await self.runtime.bring_up(detach=True, force_recreate=plan.force_recreate)
                return PhaseRecord(phase, PhaseStatus.DONE)

            case Phase.VERIFY:
                return await self._verify(phase)

            case Phase.PRUNE_IMAGES:
                outcome = JobOutcome()
                await outcome.attempt('prune images', self.runtime.prune_images())
                return PhaseRecord(phase, PhaseStatus.WARNED if outcome.warnings else PhaseStatus.DONE,
                                   warnings=outcome.warnings)

    async def _verify(self, phase: Phase) -> PhaseRecord:
        outcome = JobOutcome()
        services = await outcome.attempt('get service list', self.runtime.list_defined_services())
        if services is None:
            return PhaseRecord(phase, PhaseStatus.WARNED, warnings=outcome.warnings)

        summary = await verify_services(self.runtime, services, self.config)
        return PhaseRecord(phase, PhaseStatus.DONE, details={'summary': summary})

    async def _teardown(self, phase: Phase) -> PhaseRecord:
        outcome = JobOutcome()
        stopped = []

        containers = await outcome.attempt('list running containers', self.runtime.list_containers())
        for container in containers or []:
            CONSOLE.print(Text(f'  Stopping {container.name}', style=Style.context))
            if await outcome.attempt(f'stop {container.name}', self._stop(container)):
                stopped += [container.name]

        if containers is not None and not len(containers):
            CONSOLE.print(Text(f'  No running {self.settings.project_name} containers', style=Style.context))

        await self.runtime.reclaim(outcome)

        return PhaseRecord(phase, PhaseStatus.WARNED if outcome.warnings else PhaseStatus.DONE,
                           warnings=outcome.warnings, details={'stopped': stopped})

    async def _stop(self, container) -> bool:
        await self.runtime.stop_container(container)
        return True

    async def deploy(self, plan: DeploymentPlan = DeploymentPlan()) -> DeployReport:
        report = DeployReport(plan)
        planned_directories: set[Path] = set()
        style = Style()

        if plan.dry_run:
            CONSOLE.print(Text('[dry-run] No changes will be made', style=style.mark))
        CONSOLE.print(Text(f'Deploying {self.settings.project_name} ({self.settings.variant})',
                           style=style.mark_neutral))

        for phase, enabled in plan.phases():
            if not enabled:
                report.records += [PhaseRecord(phase, PhaseStatus.SKIPPED)]
                continue

            if plan.dry_run and phase not in PROVISIONING_PHASES:
                CONSOLE.print(Text(f'[dry-run] Would run {phase}', style=style.context))
                report.records += [PhaseRecord(phase, PhaseStatus.PLANNED)]
                continue

            CONSOLE.print(Text(f'\n{phase}...', style=style.info))
            try:
                record = await self._run_phase(phase, plan, planned_directories)
            except StackError as e:
                CONSOLE.print(Text(f'  Error: {e.message}', style=style.bad))
                report.records += [PhaseRecord(phase, PhaseStatus.FAILED, error=e)]
                break
            report.records += [record]

        CONSOLE.print(report.as_rich_text(style))
        if not report.success:
            CONSOLE.print(Text(f'\nDeployment failed at {report.failed_phase}', style=style.bad))
        elif plan.dry_run:
            CONSOLE.print(Text('\n[dry-run] Deployment plan complete', style=style.good))
        else:
            CONSOLE.print(Text(f'\n{self.settings.project_name} deployed successfully', style=style.good))
        return report
