import vedro

from contexts.fake_docker import Response
from contexts.fake_docker import fake_docker
from contexts.settings import loaded_settings
from contexts.settings import quick_config
from contexts.stack_tree import stack_tree
from mediastack.core.compose_interface import ComposeShellInterface


class Scenario(vedro.Scenario):
    subject = 'run compose subcommands against stack definition'

    async def given_fake_docker(self):
        self.docker = fake_docker({
            'config --services': Response(output='s1\ns2'),
            'ps -q s1': Response(output='0123456789ab'),
        })

    async def given_compose_interface(self):
        self.tree = stack_tree()
        self.settings = loaded_settings(self.tree)
        self.compose = ComposeShellInterface(
            self.settings, quick_config(MEDIASTACK_DOCKER_BINARY=str(self.docker.binary))
        )

    async def when_user_runs_compose_commands(self):
        self.services = await self.compose.dc_config_services()
        await self.compose.dc_up(detach=True, force_recreate=True)
        await self.compose.dc_down(remove_volumes=True, remove_orphans=True)
        self.s1_ids = await self.compose.dc_ps_ids('s1')
        self.s2_ids = await self.compose.dc_ps_ids('s2')

    async def then_it_should_bind_definition_env_file_and_project(self):
        prefix = (f'compose -f {self.settings.definition_path} '
                  f'--env-file {self.tree.env_file} -p mediastack')
        assert self.docker.calls() == [
            f'{prefix} config --services',
            f'{prefix} up -d --force-recreate --remove-orphans',
            f'{prefix} down -v --remove-orphans',
            f'{prefix} ps -q s1',
            f'{prefix} ps -q s2',
        ]

    async def and_it_should_parse_captured_output(self):
        assert self.services == ['s1', 's2']
        assert self.s1_ids == ['0123456789ab']
        assert self.s2_ids == []
