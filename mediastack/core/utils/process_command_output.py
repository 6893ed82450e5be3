import asyncio
import sys
from typing import BinaryIO
from typing import NamedTuple

ECHO_PREFIX = b'  | '


class ProcessOutput(NamedTuple):
    stdout: bytes
    stderr: bytes

    def text(self) -> str:
        return (self.stdout + self.stderr).decode('utf-8', errors='replace').strip()


async def _collect_lines(stream: asyncio.StreamReader, echo_to: BinaryIO | None) -> bytes:
    lines = []
    async for line in stream:
        if echo_to is not None:
            echo_to.write(ECHO_PREFIX + line)
            echo_to.flush()
        lines += [line]
    return b''.join(lines)


async def collect_process_output(process: asyncio.subprocess.Process, echo: bool,
                                 timeout: float | None) -> ProcessOutput:
    """
    Reads stdout and stderr of a started process until it exits.

    With echo every line is mirrored to this process' matching stream as it arrives.
    On timeout or cancellation the process is killed and reaped before the error propagates.
    """
    async def till_exit() -> ProcessOutput:
        stdout, stderr = await asyncio.gather(
            _collect_lines(process.stdout, sys.stdout.buffer if echo else None),
            _collect_lines(process.stderr, sys.stderr.buffer if echo else None),
        )
        await process.wait()
        return ProcessOutput(stdout, stderr)

    try:
        return await asyncio.wait_for(till_exit(), timeout)
    except (asyncio.TimeoutError, asyncio.CancelledError):
        if process.returncode is None:
            process.kill()
            await process.wait()
        raise
