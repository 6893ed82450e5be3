"""
Container runtime facade of mediastack.

Everything the deploy workflow asks of docker goes through ContainerRuntime, which
combines two seams:

> docker compose -f %definition% --env-file %config_dir%/.env -p %project% config|pull|up|down|...
    (compose_interface.ComposeShellInterface)
> docker engine api: list / inspect / stop / prune, filtered by com.docker.compose.project=%project%
    (docker_api.DockerApiInterface)

Containers of the stack are always discovered by the project label, never by name.
"""
