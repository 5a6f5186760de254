import os
from pathlib import Path

DEFAULT_CONFIGFILE = "rebound.yaml"


def get_configfile() -> Path | None:
    """
    Locate the optional YAML configuration file.

    Resolution order:
      1. REBOUNDCONFIG environment variable (the file must exist)
      2. 'rebound.yaml' in the current working directory, if present

    Returns None when no file is configured, in which case settings come
    from the environment and defaults only.
    """
    raw = os.getenv("REBOUNDCONFIG")

    if raw is None:
        file = Path.cwd() / DEFAULT_CONFIGFILE
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Fix or unset the REBOUNDCONFIG environment variable\n"
            f"  - Or place a '{DEFAULT_CONFIGFILE}' file in the current working directory."
        )

    return file
