from typing import NamedTuple

# Paths below FOLDER_FOR_DATA and FOLDER_FOR_MEDIA mounted by the stack services.
DATA_DIRECTORIES = (
    'authentik/certs',
    'authentik/media',
    'authentik/templates',
    'bazarr',
    'chromium',
    'crowdsec/data',
    'ddns-updater',
    'filebot',
    'gluetun',
    'grafana',
    'headplane/data',
    'headscale/data',
    'heimdall',
    'homarr/configs',
    'homarr/data',
    'homarr/icons',
    'homepage',
    'huntarr',
    'jellyfin',
    'jellyseerr',
    'lidarr',
    'logs/unpackerr',
    'logs/traefik',
    'mylar',
    'plex',
    'portainer',
    'postgresql',
    'prometheus',
    'prowlarr',
    'qbittorrent',
    'radarr',
    'readarr',
    'sabnzbd',
    'sonarr',
    'tailscale',
    'tdarr/server',
    'tdarr/configs',
    'tdarr/logs',
    'tdarr-node',
    'traefik/letsencrypt',
    'traefik-certs-dumper',
    'unpackerr',
    'valkey',
    'whisparr',
)

MEDIA_DIRECTORIES = (
    # media library
    'media/anime',
    'media/audio',
    'media/books',
    'media/comics',
    'media/movies',
    'media/music',
    'media/photos',
    'media/tv',
    'media/xxx',
    # usenet downloads
    'usenet/anime',
    'usenet/audio',
    'usenet/books',
    'usenet/comics',
    'usenet/complete',
    'usenet/console',
    'usenet/incomplete',
    'usenet/movies',
    'usenet/music',
    'usenet/prowlarr',
    'usenet/software',
    'usenet/tv',
    'usenet/xxx',
    # torrent downloads
    'torrents/anime',
    'torrents/audio',
    'torrents/books',
    'torrents/comics',
    'torrents/complete',
    'torrents/console',
    'torrents/incomplete',
    'torrents/movies',
    'torrents/music',
    'torrents/prowlarr',
    'torrents/software',
    'torrents/tv',
    'torrents/xxx',
    # other
    'watch',
    'filebot/input',
    'filebot/output',
)

DIRECTORY_MODE = 0o2775
PARENT_DIRECTORY_MODE = 0o755


class ConfigFile(NamedTuple):
    source: str  # file name in the config directory
    destination: str  # relative to FOLDER_FOR_DATA
    mode: int = 0o664


class SpecialFile(NamedTuple):
    path: str  # relative to FOLDER_FOR_DATA
    mode: int
    create: bool = True


CONFIG_FILES = (
    ConfigFile('headplane-config.yaml', 'headplane/config.yaml'),
    ConfigFile('headscale-config.yaml', 'headscale/config.yaml'),
    ConfigFile('traefik-static.yaml', 'traefik/traefik.yaml'),
    ConfigFile('traefik-dynamic.yaml', 'traefik/dynamic.yaml'),
    ConfigFile('traefik-internal.yaml', 'traefik/internal.yaml'),
    ConfigFile('crowdsec-acquis.yaml', 'crowdsec/acquis.yaml'),
)

SPECIAL_FILES = (
    SpecialFile('traefik/letsencrypt/acme.json', mode=0o600, create=True),
)

CONFIG_PERMISSION_PATTERNS = ('*.yaml', '*.yml', '.env', '*.sh')
SCRIPT_SUFFIX = '.sh'
SCRIPT_MODE = 0o775
CONFIG_MODE = 0o664
