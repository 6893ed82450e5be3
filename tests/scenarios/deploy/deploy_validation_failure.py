import vedro

from contexts.settings import loaded_settings
from contexts.settings import quick_config
from contexts.stack_tree import stack_tree
from interfaces.fake_compose import FakeComposeInterface
from interfaces.fake_docker_api import FakeApiClient
from interfaces.runtime import fake_runtime
from mediastack import DeploymentPlan
from mediastack import StackDeployer
from mediastack.deploy import Phase
from mediastack.errors import DefinitionError


class Scenario(vedro.Scenario):
    subject = 'deploy when {method} fails'

    @vedro.params('dc_config', Phase.VALIDATE, DefinitionError)
    @vedro.params('dc_pull', Phase.PULL, Exception)
    @vedro.params('dc_up', Phase.BRING_UP, Exception)
    def __init__(self, method, failed_phase, error_type):
        self.method = method
        self.failed_phase = failed_phase
        self.error_type = error_type

    async def given_deployer(self):
        settings = loaded_settings(stack_tree())
        config = quick_config()
        self.compose = FakeComposeInterface(failing={self.method})
        self.client = FakeApiClient([])
        self.deployer = StackDeployer(
            settings, config, runtime=fake_runtime(settings, config, self.compose, self.client)
        )

    async def when_user_deploys(self):
        self.report = await self.deployer.deploy(DeploymentPlan(pull=True, prune_images=True))

    async def then_it_should_abort_at_failed_phase(self):
        assert self.report.failed_phase == self.failed_phase
        assert self.report.records[-1].phase == self.failed_phase
        assert isinstance(self.report.records[-1].error, self.error_type)

    async def and_it_should_not_run_later_phases(self):
        assert self.compose.methods[-1] == self.method
        assert self.client.called('prune_images') == []
