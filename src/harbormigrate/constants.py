"""Fixed values shared across harbor-migrate services."""

USER_AGENT = "harbor-migrate/1.0.0"
CONTENT_TYPE = "application/json; charset=utf-8"

PAGE_SIZE = 50

PROJECTS_PATH = "/api/v2.0/projects"
REPOSITORIES_PATH = "/api/v2.0/repositories"

# Harbor treats -1 as "no quota".
UNLIMITED_STORAGE = -1

DEFAULT_CONNECT_TIMEOUT = 30.0
DEFAULT_USERNAME = "admin"
DEFAULT_CONFIG_FILE = ".harbormigrate.yml"
