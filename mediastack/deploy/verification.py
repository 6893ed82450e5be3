import asyncio
from typing import NamedTuple

from rich.text import Text
from rtry import retry

from mediastack.core.config import Config
from mediastack.core.runtime import ContainerRuntime
from mediastack.errors.base import StackError
from mediastack.output.console import CONSOLE
from mediastack.output.styles import Style


class VerificationSummary(NamedTuple):
    expected: tuple[str, ...]
    running: tuple[str, ...]
    not_running: tuple[str, ...]

    @property
    def all_running(self) -> bool:
        return not self.not_running

    def as_rich_text(self, style: Style = Style()) -> Text:
        if self.all_running:
            return Text(f'  All {len(self.running)} services running', style=style.good)
        summary_text = Text()
        for service in self.not_running:
            summary_text.append(Text(f'  Not running: {service}\n', style=style.bad))
        summary_text.append(Text(f'  {len(self.running)}/{len(self.expected)} services running',
                                 style=style.suspicious))
        return summary_text

    def as_json(self) -> dict:
        return {
            'expected': len(self.expected),
            'running': list(self.running),
            'not_running': list(self.not_running),
        }


async def check_services_running(runtime: ContainerRuntime, services: list[str]) -> VerificationSummary:
    running = []
    not_running = []
    for service in services:
        try:
            is_running = await runtime.is_service_running(service)
        except StackError as e:
            CONSOLE.print(Text(f'  Can\'t check {service}: {e.message}', style=Style.context))
            is_running = False
        if is_running:
            running += [service]
        else:
            not_running += [service]
    return VerificationSummary(tuple(services), tuple(running), tuple(not_running))


async def verify_services(runtime: ContainerRuntime, services: list[str], config: Config) -> VerificationSummary:
    """
    Waits the settling delay, then checks every expected service is running.

    Rechecks up to config.verify_attempts times while some service is still down.
    The summary is advisory: nothing here raises on services that are not running.
    """
    if config.settle_delay_s > 0:
        await asyncio.sleep(config.settle_delay_s)

    check = retry(
        attempts=max(config.verify_attempts, 1),
        delay=config.verify_delay_s,
        until=lambda summary: not summary.all_running,
    )(check_services_running)
    summary = await check(runtime, services)

    CONSOLE.print(summary.as_rich_text())
    return summary
