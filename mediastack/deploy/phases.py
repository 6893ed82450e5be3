from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import NamedTuple

from rich.text import Text

from mediastack.errors.base import StackError
from mediastack.errors.deploy import DeploymentError
from mediastack.output.styles import Style
from mediastack.stack.provisioner import FsAction


class PhaseSpec(NamedTuple):
    number: int
    title: str
    skippable: bool


class Phase(Enum):
    CREATE_DIRECTORIES = PhaseSpec(1, 'Creating directories', skippable=True)
    CONFIG_PERMISSIONS = PhaseSpec(2, 'Setting config permissions', skippable=False)
    STAGE_FILES = PhaseSpec(3, 'Copying configuration files', skippable=True)
    VALIDATE = PhaseSpec(4, 'Validating stack definition', skippable=False)
    PULL = PhaseSpec(5, 'Pulling images', skippable=True)
    TEARDOWN = PhaseSpec(6, 'Stopping existing containers', skippable=False)
    BRING_UP = PhaseSpec(7, 'Starting services', skippable=False)
    VERIFY = PhaseSpec(8, 'Verifying services', skippable=False)
    PRUNE_IMAGES = PhaseSpec(9, 'Pruning unused images', skippable=True)

    @property
    def number(self) -> int:
        return self.value.number

    @property
    def title(self) -> str:
        return self.value.title

    @property
    def skippable(self) -> bool:
        return self.value.skippable

    def __str__(self):
        return f'Step {self.number}: {self.title}'


# phases performed before the dry-run short-circuit
PROVISIONING_PHASES = (Phase.CREATE_DIRECTORIES, Phase.CONFIG_PERMISSIONS, Phase.STAGE_FILES)


class DeploymentPlan(NamedTuple):
    create_directories: bool = True
    stage_files: bool = True
    pull: bool = False
    force_recreate: bool = False
    prune_images: bool = False
    dry_run: bool = False

    def is_enabled(self, phase: Phase) -> bool:
        match phase:
            case Phase.CREATE_DIRECTORIES:
                return self.create_directories
            case Phase.STAGE_FILES:
                return self.stage_files
            case Phase.PULL:
                return self.pull
            case Phase.PRUNE_IMAGES:
                return self.prune_images
            case _:
                return True

    def phases(self) -> list[tuple[Phase, bool]]:
        return [(phase, self.is_enabled(phase)) for phase in Phase]


class PhaseStatus:
    DONE = 'done'
    WARNED = 'warned'
    SKIPPED = 'skipped'
    PLANNED = 'planned'
    FAILED = 'failed'


@dataclass
class PhaseRecord:
    phase: Phase
    status: str
    warnings: list[str] = field(default_factory=list)
    actions: list[FsAction] = field(default_factory=list)
    error: StackError | None = None
    details: dict = field(default_factory=dict)

    def as_rich_text(self, style: Style = Style()) -> Text:
        match self.status:
            case PhaseStatus.DONE:
                status_style = style.good
            case PhaseStatus.WARNED:
                status_style = style.suspicious
            case PhaseStatus.FAILED:
                status_style = style.bad
            case _:
                status_style = style.context
        record_text = Text('  ')
        record_text.append(Text(f'{self.phase.number}. {self.phase.title:{36}}', style=style.regular))
        record_text.append(Text(f'{self.status:{8}}', style=status_style))
        if self.warnings:
            record_text.append(Text(f' {len(self.warnings)} warning(s)', style=style.suspicious))
        record_text.append(Text('\n'))
        return record_text

    def as_json(self) -> dict:
        return {
            'phase': self.phase.number,
            'title': self.phase.title,
            'status': self.status,
            'warnings': list(self.warnings),
            'actions': [str(action) for action in self.actions],
            'error': self.error.message if self.error else None,
        }


@dataclass
class DeployReport:
    plan: DeploymentPlan
    records: list[PhaseRecord] = field(default_factory=list)

    def record(self, phase: Phase) -> PhaseRecord | None:
        for record in self.records:
            if record.phase == phase:
                return record
        return None

    @property
    def success(self) -> bool:
        return self.failed_phase is None

    @property
    def failed_phase(self) -> Phase | None:
        for record in self.records:
            if record.status == PhaseStatus.FAILED:
                return record.phase
        return None

    @property
    def warnings(self) -> list[str]:
        return [warning for record in self.records for warning in record.warnings]

    @property
    def actions(self) -> list[FsAction]:
        return [action for record in self.records for action in record.actions]

    @property
    def verification(self):
        record = self.record(Phase.VERIFY)
        if record is None:
            return None
        return record.details.get('summary')

    def raise_for_failure(self) -> None:
        for record in self.records:
            if record.status == PhaseStatus.FAILED:
                raise DeploymentError(record.phase, record.error) from record.error

    def as_rich_text(self, style: Style = Style()) -> Text:
        report_text = Text()
        for record in self.records:
            report_text.append(record.as_rich_text(style))
        return report_text

    def as_json(self) -> dict:
        return {
            'success': self.success,
            'dry_run': self.plan.dry_run,
            'phases': [record.as_json() for record in self.records],
        }
