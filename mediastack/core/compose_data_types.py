from dataclasses import dataclass
from dataclasses import field
from typing import Callable
from typing import Iterator

from rich.text import Text

from mediastack.output.styles import Style

PROJECT_LABEL = 'com.docker.compose.project'
SERVICE_LABEL = 'com.docker.compose.service'


class ContainerState:
    RUNNING = 'running'
    EXITED = 'exited'
    DEAD = 'dead'
    PAUSED = 'paused'


class ContainerHealth:
    HEALTHY = 'healthy'
    UNHEALTHY = 'unhealthy'
    STARTING = 'starting'


def format_public_ports(ports: list[dict]) -> list[str]:
    return [
        f"{port['PublicPort']}->{port['PrivatePort']}/{port.get('Type', 'tcp')}"
        for port in ports or []
        if port.get('PublicPort')
    ]


@dataclass
class ContainerInfo:
    id: str
    name: str
    image: str
    state: str
    status: str  # "Up 5 minutes (healthy)"
    health: str | None = None
    ports: list[str] = field(default_factory=list)
    labels: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.state != ContainerState.RUNNING:
            self.health = None

    @classmethod
    def from_api(cls, container: dict, health: str | None = None) -> 'ContainerInfo':
        names = container.get('Names') or ['']
        return cls(
            id=container['Id'][:12],
            name=names[0].lstrip('/'),
            image=container.get('Image', ''),
            state=container.get('State', ''),
            status=container.get('Status', ''),
            health=health,
            ports=format_public_ports(container.get('Ports')),
            labels=dict(container.get('Labels') or {}),
        )

    @property
    def is_running(self) -> bool:
        return self.state == ContainerState.RUNNING

    @property
    def service(self) -> str | None:
        return self.labels.get(SERVICE_LABEL)

    def belongs_to(self, project: str) -> bool:
        return self.labels.get(PROJECT_LABEL) == project

    def as_rich_text(self, style: Style = Style()):
        container_string = Text('     ')
        container_string.append(Text(f"{self.name:{30}}", style=style.regular))

        match self.state:
            case ContainerState.RUNNING:
                state_style = style.good
            case ContainerState.PAUSED:
                state_style = style.suspicious
            case _:
                state_style = style.bad
        container_string.append(Text(f"{self.state:{12}}", style=state_style))

        match self.health:
            case ContainerHealth.HEALTHY:
                health_style = style.good
            case ContainerHealth.STARTING:
                health_style = style.suspicious
            case _:
                health_style = style.bad
        container_string.append(Text(f"{self.health or '':{12}}", style=health_style))
        container_string.append(Text(self.status, style=style.regular))
        container_string.append(Text('\n', style=style.regular))
        return container_string

    def as_json(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'image': self.image,
            'state': self.state,
            'status': self.status,
            'health': self.health,
            'ports': list(self.ports),
        }


class ContainersState:
    def __init__(self, containers: list[ContainerInfo]):
        self._containers = sorted(containers, key=lambda container: container.name)

    def __iter__(self) -> Iterator[ContainerInfo]:
        return iter(self._containers)

    def __len__(self):
        return len(self._containers)

    def __repr__(self):
        return f'{type(self).__name__}(<{self._containers}>)'

    @property
    def running(self) -> int:
        return len([container for container in self._containers if container.is_running])

    @property
    def stopped(self) -> int:
        return len(self._containers) - self.running

    @property
    def healthy(self) -> int:
        return len([container for container in self._containers if container.health == ContainerHealth.HEALTHY])

    @property
    def unhealthy(self) -> int:
        return len([container for container in self._containers if container.health == ContainerHealth.UNHEALTHY])

    def as_rich_text(
        self,
        filter: Callable[[ContainerInfo], bool] = lambda x: True,
        style: Style = Style()
    ) -> Text:
        containers_text = Text()
        for container in self._containers:
            if filter(container):
                containers_text.append(container.as_rich_text(style))
        return containers_text

    def as_json(self, filter: Callable[[ContainerInfo], bool] = lambda x: True) -> list[dict]:
        return [container.as_json() for container in self._containers if filter(container)]

    def summary(self) -> dict[str, int]:
        return {
            'total': len(self._containers),
            'running': self.running,
            'stopped': self.stopped,
            'healthy': self.healthy,
            'unhealthy': self.unhealthy,
        }
