import vedro

from contexts.settings import loaded_settings
from contexts.settings import quick_config
from contexts.stack_tree import stack_tree
from interfaces.fake_compose import FakeComposeInterface
from interfaces.fake_docker_api import FakeApiClient
from interfaces.runtime import fake_runtime
from mediastack import StackOperations


class Scenario(vedro.Scenario):
    subject = 'stack operations in dry run mode'

    async def given_operations(self):
        settings = loaded_settings(stack_tree())
        config = quick_config()
        self.compose = FakeComposeInterface()
        self.client = FakeApiClient([])
        self.operations = StackOperations(settings, config, runtime=fake_runtime(settings, config, self.compose,
                                                                                 self.client))

    async def when_user_runs_operations_in_dry_run(self):
        await self.operations.stop(prune=True, dry_run=True)
        await self.operations.restart(['s1'], pull=True, dry_run=True)
        await self.operations.pull(dry_run=True)

    async def then_it_should_not_call_runtime(self):
        assert self.compose.calls == []
        assert self.client.calls == []
