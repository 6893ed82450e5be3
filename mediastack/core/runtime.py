from rich.text import Text

from mediastack.core.compose_data_types import ContainerInfo
from mediastack.core.compose_data_types import ContainerState
from mediastack.core.compose_data_types import ContainersState
from mediastack.core.compose_interface import ComposeShellInterface
from mediastack.core.config import Config
from mediastack.core.docker_api import DockerApiInterface
from mediastack.core.utils.definition_files import get_definition_services
from mediastack.errors.runtime import DefinitionError
from mediastack.errors.runtime import RuntimeInvocationError
from mediastack.errors.runtime import RuntimeTimeoutError
from mediastack.helpers.jobs_result import JobOutcome
from mediastack.output.console import CONSOLE
from mediastack.output.styles import Style
from mediastack.settings.settings_types import Settings


class ContainerRuntime:
    def __init__(self,
                 settings: Settings,
                 config: Config,
                 compose_interface: ComposeShellInterface = None,
                 docker_api: DockerApiInterface = None):
        self.settings = settings
        self.compose = compose_interface
        if self.compose is None:
            self.compose = ComposeShellInterface(settings, config)
        self.api = docker_api
        if self.api is None:
            self.api = DockerApiInterface(settings, config)

    async def validate_definition(self) -> list[str]:
        services = get_definition_services(self.settings.definition_path)
        try:
            await self.compose.dc_config()
        except RuntimeTimeoutError:
            raise
        except RuntimeInvocationError as e:
            raise DefinitionError(
                f'Stack definition {self.settings.definition_path} is invalid:\n{e.output}'
            ) from e
        return services

    async def list_defined_services(self) -> list[str]:
        return await self.compose.dc_config_services()

    async def pull_all(self) -> None:
        await self.compose.dc_pull([])

    async def pull_one(self, service: str) -> None:
        await self.compose.dc_pull([service])

    async def bring_up(self, detach: bool = True, force_recreate: bool = False) -> None:
        await self.compose.dc_up(detach=detach, force_recreate=force_recreate)

    async def tear_down(self, remove_volumes: bool = False, remove_orphans: bool = False) -> None:
        await self.compose.dc_down(remove_volumes=remove_volumes, remove_orphans=remove_orphans)

    async def restart_all(self) -> None:
        await self.compose.dc_restart([])

    async def restart_one(self, service: str) -> None:
        await self.compose.dc_restart([service])

    async def stop_one(self, service: str) -> None:
        await self.compose.dc_stop([service])

    async def stream_logs(self, service: str | None = None, follow: bool = False, tail: str | None = '100',
                          timestamps: bool = False) -> None:
        await self.compose.dc_logs(service, follow=follow, tail=tail, timestamps=timestamps)

    async def exec_in_service(self, service: str, command: list[str], interactive: bool = False) -> None:
        await self.compose.dc_exec(service, command, interactive=interactive)

    async def is_service_running(self, service: str) -> bool:
        return bool(await self.compose.dc_ps_ids(service))

    async def compose_version(self) -> str:
        return await self.compose.compose_version()

    async def ping(self) -> None:
        await self.api.ping()

    async def list_containers(self, include_stopped: bool = False) -> ContainersState:
        containers = []
        for container in await self.api.containers(include_stopped):
            info = ContainerInfo.from_api(container)
            if not info.belongs_to(self.settings.project_name):
                continue

            if info.state == ContainerState.RUNNING:
                try:
                    info.health = await self.api.health(container['Id'])
                except RuntimeInvocationError as e:
                    CONSOLE.print(Text(f'  No health state for {info.name}: {e.message}', style=Style.suspicious))

            containers += [info]
        return ContainersState(containers)

    async def stop_container(self, container: ContainerInfo) -> None:
        await self.api.stop(container.id)

    async def reclaim(self, outcome: JobOutcome) -> None:
        await outcome.attempt('prune containers', self.api.prune_containers())
        await outcome.attempt('prune volumes', self.api.prune_volumes())
        await outcome.attempt('prune networks', self.api.prune_networks())

    async def prune_images(self) -> None:
        await self.api.prune_images()
