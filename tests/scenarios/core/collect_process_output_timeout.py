import asyncio
import time

import vedro
from vedro import catched

from mediastack.core.utils.process_command_output import collect_process_output


class Scenario(vedro.Scenario):
    subject = 'collect output of process outliving its timeout'

    async def given_hanging_process(self):
        self.process = await asyncio.create_subprocess_exec(
            'sh', '-c', 'echo started; exec sleep 30',
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

    async def when_user_collects_output_with_short_timeout(self):
        started = time.monotonic()
        with catched(asyncio.TimeoutError) as self.exception:
            await collect_process_output(self.process, False, timeout=0.5)
        self.elapsed = time.monotonic() - started

    async def then_it_should_raise_timeout(self):
        assert self.exception.type is asyncio.TimeoutError

    async def and_it_should_kill_process(self):
        assert self.process.returncode is not None
        assert self.elapsed < 10
