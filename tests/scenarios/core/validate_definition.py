import vedro
from vedro import catched

from contexts.settings import loaded_settings
from contexts.settings import quick_config
from contexts.stack_tree import definition_file
from contexts.stack_tree import stack_tree
from interfaces.fake_compose import FakeComposeInterface
from interfaces.runtime import fake_runtime
from mediastack.errors import DefinitionError


class Scenario(vedro.Scenario):
    subject = 'validate stack definition: {case}'

    @vedro.params('valid', None, set(), None)
    @vedro.params('bad yaml', 'services:\n  s1: [\n', set(), 'is not valid yaml')
    @vedro.params('no services', 'volumes:\n  data: {}\n', set(), 'has no "services" section')
    @vedro.params('rejected by compose', None, {'dc_config'}, 'is invalid')
    def __init__(self, case, content, failing, expected_error):
        self.case = case
        self.content = content
        self.failing = failing
        self.expected_error = expected_error

    async def given_stack_definition(self):
        self.tree = stack_tree()
        if self.content is not None:
            definition_file(self.tree, 'full-download-vpn', self.content)
        self.compose = FakeComposeInterface(failing=self.failing)
        self.runtime = fake_runtime(loaded_settings(self.tree), quick_config(), compose=self.compose)

    async def when_user_validates_definition(self):
        with catched(DefinitionError) as self.exception:
            self.services = await self.runtime.validate_definition()

    async def then_it_should_report_result(self):
        if self.expected_error is None:
            assert self.exception.type is None
            assert self.services == ['s1', 's2']
            assert await self.runtime.list_defined_services() == ['s1', 's2']
        else:
            assert self.exception.type is DefinitionError
            assert self.expected_error in self.exception.value.message
