import vedro

from config import Config
from contexts.settings import loaded_settings
from contexts.settings import quick_config
from contexts.stack_tree import stack_tree
from interfaces.fake_docker_api import FakeApiClient
from interfaces.fake_docker_api import api_container
from interfaces.runtime import fake_runtime
from mediastack.core.compose_data_types import ContainerInfo


class Scenario(vedro.Scenario):
    subject = 'infer health of running and stopped containers'

    async def given_containers_with_health_checks(self):
        self.client = FakeApiClient([
            api_container('mediastack-s1-1', Config.PROJECT_NAME, health='healthy'),
            api_container('mediastack-s2-1', Config.PROJECT_NAME, health='unhealthy'),
            api_container('mediastack-s3-1', Config.PROJECT_NAME, state='exited', health='unhealthy'),
            api_container('mediastack-s4-1', Config.PROJECT_NAME),
        ])
        self.runtime = fake_runtime(loaded_settings(stack_tree()), quick_config(), client=self.client)

    async def when_user_lists_all_containers(self):
        self.containers = await self.runtime.list_containers(include_stopped=True)

    async def then_it_should_report_health_of_running_containers(self):
        assert {container.name: container.health for container in self.containers} == {
            'mediastack-s1-1': 'healthy',
            'mediastack-s2-1': 'unhealthy',
            'mediastack-s3-1': None,
            'mediastack-s4-1': None,
        }

    async def and_it_should_inspect_only_running_containers(self):
        assert len(self.client.called('inspect_container')) == 3

    async def and_it_should_tally_states(self):
        assert self.containers.summary() == {
            'total': 4, 'running': 3, 'stopped': 1, 'healthy': 1, 'unhealthy': 1,
        }

    async def and_stopped_container_should_never_carry_health(self):
        container = ContainerInfo('abc', 'name', 'image', state='exited', status='Exited (1)', health='healthy')
        assert container.health is None
