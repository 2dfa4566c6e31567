import os
from pathlib import Path
from typing import Optional

import yaml

from prstatus_core.bots import BOT_PATTERNS

DEFAULT_CONFIG: dict = {
    "limit": 100,
    "prod_threshold_hours": 48,
    "bot_patterns": list(BOT_PATTERNS),
    "width": None,  # None = use the terminal width (80 if unknown)
}


def load_config(config_path: str = ".prstatus.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prstatus.yml in the current directory
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "bot_patterns": list(DEFAULT_CONFIG["bot_patterns"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Patterns are matched against lower-cased logins.
    config["bot_patterns"] = [str(p).lower() for p in config["bot_patterns"] or []]

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config
