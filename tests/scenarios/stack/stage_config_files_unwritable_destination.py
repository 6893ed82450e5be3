import os

import vedro
from vedro import catched

from contexts.stack_tree import config_file
from contexts.stack_tree import stack_tree
from mediastack.errors import FilesystemError
from mediastack.stack.provisioner import FilesystemProvisioner


class Scenario(vedro.Scenario):
    subject = 'stage configuration file onto a directory'

    async def given_destination_occupied_by_directory(self):
        self.tree = stack_tree()
        config_file(self.tree, 'headplane-config.yaml')
        self.destination = self.tree.data_root / 'headplane/config.yaml'
        self.destination.mkdir(parents=True)

    async def when_user_stages_files(self):
        with catched(FilesystemError) as self.exception:
            FilesystemProvisioner().stage_config_files(
                self.tree.config_dir, self.tree.data_root, os.getuid(), os.getgid()
            )

    async def then_it_should_raise_filesystem_error_with_path(self):
        assert self.exception.type is FilesystemError
        assert self.exception.value.path == self.destination
        assert str(self.destination) in self.exception.value.message
