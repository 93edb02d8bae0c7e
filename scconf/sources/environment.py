"""Environment variable snapshot."""

import os
from collections.abc import Mapping


def read_environment(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Copy the environment into a plain dict.

    Resolution never sees ``os.environ`` directly, so later changes to the
    process environment cannot leak into an in-flight resolution.
    """
    return dict(os.environ if environ is None else environ)
