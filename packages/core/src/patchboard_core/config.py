import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "gerrit_url": None,  # e.g. https://review.example.org; required by every fetching command
    "query": "is:open",
    "query_prefix": "/changes/?q=",
    "query_suffix": "&o=DETAILED_LABELS&o=DETAILED_ACCOUNTS",
    "automation_account": "jenkins",  # CI voter hidden from the reviewer column
    "report_ttl_seconds": 600,
    "data_ttl_seconds": 600,
    "request_timeout": 30,
    "request_retries": 3,
    "host": "127.0.0.1",
    "port": 3000,
    "title": "Gerrit Report",
    "store": "noop",  # noop | file | sqlite
    "webhook_url": None,
}

# Environment variables take precedence over the file so deployments can
# point an existing config at another server without editing it.
_ENV_OVERRIDES = {
    "gerrit_url": "GERRIT_URL",
    "webhook_url": "PATCHBOARD_WEBHOOK_URL",
}


def load_config(config_path: str = ".patchboard.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .patchboard.yml in the current directory
      3. CLI argument overrides
      4. GERRIT_URL / PATCHBOARD_WEBHOOK_URL environment variables
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    for key, env_var in _ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            config[key] = value

    if config.get("gerrit_url"):
        config["gerrit_url"] = config["gerrit_url"].rstrip("/")

    return config


def require_gerrit_url(config: dict) -> str:
    """Return the configured Gerrit base URL or raise ValueError."""
    url = config.get("gerrit_url")
    if not url:
        raise ValueError("gerrit_url is not configured. Set it in .patchboard.yml or export GERRIT_URL.")
    return url
