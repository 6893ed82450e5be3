import os

import vedro

from contexts.stack_tree import stack_tree
from helpers.provisioners import file_mode
from mediastack.stack.catalogs import DATA_DIRECTORIES
from mediastack.stack.catalogs import MEDIA_DIRECTORIES
from mediastack.stack.provisioner import FilesystemProvisioner
from mediastack.stack.provisioner import FsActionKind


class Scenario(vedro.Scenario):
    subject = 'create data and media directories'

    async def given_stack_tree(self):
        self.tree = stack_tree()

    async def when_user_creates_directories(self):
        self.result = FilesystemProvisioner().create_directories(
            self.tree.data_root, self.tree.media_root, os.getuid(), os.getgid()
        )

    async def then_it_should_create_every_catalog_path(self):
        for directory in DATA_DIRECTORIES:
            assert (self.tree.data_root / directory).is_dir(), directory
        for directory in MEDIA_DIRECTORIES:
            assert (self.tree.media_root / directory).is_dir(), directory

    async def and_it_should_set_setgid_group_writable_mode(self):
        assert file_mode(self.tree.data_root / 'tdarr/server') == 0o2775
        assert file_mode(self.tree.media_root / 'torrents/incomplete') == 0o2775

    async def and_it_should_report_one_mkdir_per_catalog_path(self):
        created = [action.path for action in self.result.actions if action.kind == FsActionKind.MKDIR]
        assert len(created) == len(DATA_DIRECTORIES) + len(MEDIA_DIRECTORIES)
        assert self.result.warnings == []
