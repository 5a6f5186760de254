import os
from typing import Generator

import pytest
import yaml

from rebound.bootstrap.deps import get_config


@pytest.fixture
def clean_env(monkeypatch, tmp_path) -> Generator[None, None, None]:
    for key in list(os.environ):
        if key.startswith("REBOUND"):
            monkeypatch.delenv(key)

    # Keep a stray rebound.yaml in the working directory out of the way
    monkeypatch.chdir(tmp_path)

    get_config.cache_clear()
    try:
        yield
    finally:
        get_config.cache_clear()


@pytest.fixture
def config_file(tmp_path, monkeypatch, clean_env):
    file = tmp_path / "custom.yaml"

    data = {
        "backoff": {
            "minimum": 0.5,
            "maximum": 30.0,
            "factor": 3.0,
            "max_attempts": 5,
            "jitter": True,
        },
        "log_level": "DEBUG",
    }

    file.write_text(yaml.dump(data))
    monkeypatch.setenv("REBOUNDCONFIG", str(file))
    return file
