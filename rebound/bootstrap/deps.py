import json
import random
from collections.abc import Callable
from functools import lru_cache

from pydantic import ValidationError

from rebound.bootstrap.config.settings import BackoffSettings, ReboundConfig
from rebound.core.helpers.utils import setup_logging
from rebound.core.ports.backoff import Backoff
from rebound.core.throttling.backoff import JitterBackoff, SimpleBackoff


@lru_cache
def get_config() -> ReboundConfig:
    try:
        return ReboundConfig()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(map(str, err['loc']))}: {err['msg']}")
        raise SystemExit("\n".join(msg))


def make_backoff(
    settings: BackoffSettings | None = None,
    rng: random.Random | None = None,
) -> Backoff:
    """
    Build a fresh backoff from settings (the loaded configuration by default).

    A `JitterBackoff` is returned when jitter is enabled, a `SimpleBackoff`
    otherwise. Each call returns a new instance: backoffs hold per-loop state
    and must not be shared between retry loops.
    """
    if settings is None:
        settings = get_config().backoff
    config = settings.to_config()

    if settings.jitter:
        return JitterBackoff.from_config(config, rng=rng)

    return SimpleBackoff.from_config(config)


def backoff_factory(settings: BackoffSettings | None = None) -> Callable[[], Backoff]:
    if settings is None:
        settings = get_config().backoff
    return lambda: make_backoff(settings)


def init_logging() -> None:
    setup_logging(get_config().log_level)
