import os
from typing import Mapping

TRUE_VALUES = ('1', 'true', 'yes', 'on')


def env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, '').strip().lower() in TRUE_VALUES


class Config:
    def __init__(self, environ: Mapping[str, str] = None):
        if environ is None:
            environ = os.environ
        self.docker_binary: str = environ.get('MEDIASTACK_DOCKER_BINARY', 'docker')
        self.docker_host: str = environ.get('DOCKER_HOST', 'unix:///var/run/docker.sock')
        self.verbose: bool = env_flag(environ, 'MEDIASTACK_VERBOSE')
        # pull, up, down, stop, restart
        self.long_timeout_s = float(environ.get('MEDIASTACK_LONG_TIMEOUT', 1800))
        # config, ps, version and docker api queries
        self.query_timeout_s = float(environ.get('MEDIASTACK_QUERY_TIMEOUT', 30))
        self.stop_timeout_s = int(environ.get('MEDIASTACK_STOP_TIMEOUT', 30))
        self.settle_delay_s = float(environ.get('MEDIASTACK_SETTLE_DELAY', 5))
        self.verify_attempts = int(environ.get('MEDIASTACK_VERIFY_ATTEMPTS', 1))
        self.verify_delay_s = float(environ.get('MEDIASTACK_VERIFY_DELAY', 3))
