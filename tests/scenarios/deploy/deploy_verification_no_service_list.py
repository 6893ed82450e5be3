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
from mediastack.deploy import PhaseStatus


class Scenario(vedro.Scenario):
    subject = 'deploy when service list is unavailable for verification'

    async def given_compose_failing_to_list_services(self):
        settings = loaded_settings(stack_tree())
        config = quick_config()
        self.compose = FakeComposeInterface(services=['s1', 's2'], failing={'dc_config_services'})
        self.deployer = StackDeployer(
            settings, config, runtime=fake_runtime(settings, config, self.compose, FakeApiClient([]))
        )

    async def when_user_deploys(self):
        self.report = await self.deployer.deploy(DeploymentPlan())

    async def then_it_should_still_succeed(self):
        assert self.report.success

    async def and_verification_should_be_warned(self):
        record = self.report.record(Phase.VERIFY)
        assert record.status == PhaseStatus.WARNED
        assert record.warnings == [
            "get service list: Can't dc_config_services (exit code 1)\ndc_config_services failed"
        ]
        assert self.report.verification is None

    async def and_no_service_should_be_checked(self):
        assert self.compose.called('dc_ps_ids') == []
