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
    subject = 'deploy with service that never starts, {attempts} verification attempt(s)'

    @vedro.params('1')
    @vedro.params('3')
    def __init__(self, attempts):
        self.attempts = attempts

    async def given_deployer(self):
        settings = loaded_settings(stack_tree())
        config = quick_config(MEDIASTACK_VERIFY_ATTEMPTS=self.attempts)
        self.compose = FakeComposeInterface(services=['s1', 's2'], never_running={'s2'})
        self.deployer = StackDeployer(
            settings, config, runtime=fake_runtime(settings, config, self.compose, FakeApiClient([]))
        )

    async def when_user_deploys(self):
        self.report = await self.deployer.deploy(DeploymentPlan())

    async def then_it_should_still_succeed(self):
        assert self.report.success
        assert self.report.record(Phase.VERIFY).status == PhaseStatus.DONE

    async def and_it_should_report_service_not_running(self):
        assert self.report.verification.running == ('s1',)
        assert self.report.verification.not_running == ('s2',)
        assert not self.report.verification.all_running

    async def and_it_should_recheck_up_to_attempts(self):
        assert len(self.compose.called('dc_ps_ids')) == 2 * int(self.attempts)
