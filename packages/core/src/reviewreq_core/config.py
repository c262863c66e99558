import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "main_dir": "project-main",
    "test_dir": "project-tests",  # must match the test repository name
    "source_dir": "src/main/java",
    "base_branch": "main",
    "workflow_name": "Run Project Tests",
    "workflow_event": "release",
    "workflow_run_limit": 100,
    "reviewers": ["mtquach2", "ybsolomon"],
    "timezone": "America/Los_Angeles",
    "project_names": {
        1: "Inverted Index",
        2: "Partial Search",
        3: "Multithreading",
        4: "Search Engine",
    },
    "guide_url": "https://usf-cs272-fall2021.github.io/guides/projects/project-{project}.html",
    "bot_name": "github-actions",
    "bot_email": "github-actions@github.com",
    "entry_point_file": "Driver.java",
    "maven_repository": "~/.m2/repository",
    "store": "file",  # "file" or "actions"
    "store_path": ".reviewreq-state.json",
}


def load_config(config_path: str = ".reviewreq.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .reviewreq.yml in the current directory
      3. CLI argument overrides
    """
    config = {
        **DEFAULT_CONFIG,
        "reviewers": list(DEFAULT_CONFIG["reviewers"]),
        "project_names": dict(DEFAULT_CONFIG["project_names"]),
    }

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # YAML keys may come back as strings ("1": ...) depending on quoting.
    config["project_names"] = {int(k): v for k, v in config["project_names"].items()}

    config["github_token"] = os.environ.get("INPUT_TOKEN") or os.environ.get("GITHUB_TOKEN")

    return config


def project_name(config: dict, project: int) -> str:
    return config["project_names"].get(project, f"Project {project}")
