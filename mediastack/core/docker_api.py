import asyncio
from typing import Callable

import docker
from docker.errors import DockerException
from requests.exceptions import RequestException

from mediastack.core.compose_data_types import PROJECT_LABEL
from mediastack.core.config import Config
from mediastack.errors.runtime import RuntimeInvocationError
from mediastack.errors.runtime import RuntimeTimeoutError
from mediastack.settings.settings_types import Settings


class DockerApiInterface:
    """
    Docker engine API calls scoped to one compose project label.

    Calls are blocking docker SDK requests run in a worker thread. Each request goes
    through a client whose HTTP timeout is its operation class timeout, so a request
    abandoned by wait_for also ends in its worker thread within that bound.
    """

    def __init__(self, settings: Settings, config: Config,
                 client_factory: Callable[[float], docker.APIClient] = None):
        self.project = settings.project_name
        self.docker_host = config.docker_host
        self.query_timeout = config.query_timeout_s
        self.long_timeout = config.long_timeout_s
        self.stop_timeout = config.stop_timeout_s
        self._client_factory = client_factory if client_factory is not None else self._make_client
        self._clients: dict[float, docker.APIClient] = {}

    def _make_client(self, timeout: float) -> docker.APIClient:
        return docker.APIClient(base_url=self.docker_host, timeout=timeout)

    def client(self, timeout: float) -> docker.APIClient:
        if timeout not in self._clients:
            self._clients[timeout] = self._client_factory(timeout)
        return self._clients[timeout]

    @property
    def project_filter(self) -> dict:
        return {'label': f'{PROJECT_LABEL}={self.project}'}

    async def _call(self, operation: str, timeout: float, request: Callable, client_timeout: float = None):
        if client_timeout is None:
            client_timeout = timeout
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(lambda: request(self.client(client_timeout))),
                timeout,
            )
        except asyncio.TimeoutError:
            raise RuntimeTimeoutError(operation, timeout) from None
        except (DockerException, RequestException) as e:
            raise RuntimeInvocationError(operation, reason=str(e)) from e

    async def ping(self) -> None:
        await self._call('reach docker daemon', self.query_timeout, lambda client: client.ping())

    async def containers(self, include_stopped: bool) -> list[dict]:
        return await self._call(
            f'list {self.project} containers',
            self.query_timeout,
            lambda client: client.containers(all=include_stopped, filters=self.project_filter),
        )

    async def health(self, container_id: str) -> str | None:
        inspect = await self._call(
            f'inspect container {container_id}',
            self.query_timeout,
            lambda client: client.inspect_container(container_id),
        )
        health = (inspect.get('State') or {}).get('Health')
        if not health:
            return None
        return health.get('Status')

    async def stop(self, container_id: str) -> None:
        await self._call(
            f'stop container {container_id}',
            self.stop_timeout + self.query_timeout,
            # the SDK adds the stop timeout to the client timeout for this request
            lambda client: client.stop(container_id, timeout=self.stop_timeout),
            client_timeout=self.query_timeout,
        )

    async def prune_containers(self) -> None:
        await self._call('prune containers', self.long_timeout,
                         lambda client: client.prune_containers(filters=self.project_filter))

    async def prune_volumes(self) -> None:
        await self._call('prune volumes', self.long_timeout,
                         lambda client: client.prune_volumes(filters=self.project_filter))

    async def prune_networks(self) -> None:
        await self._call('prune networks', self.long_timeout,
                         lambda client: client.prune_networks(filters=self.project_filter))

    async def prune_images(self) -> None:
        # images carry no compose project label
        await self._call('prune images', self.long_timeout,
                         lambda client: client.prune_images(filters={'dangling': False}))
