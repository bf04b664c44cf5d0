"""Reading profiles from disk."""

from __future__ import annotations

import gzip
import json
import logging
from pathlib import Path

from invocation_analyzer.errors import InvalidProfileError
from invocation_analyzer.tracing.profile import TraceProfile

logger = logging.getLogger(__name__)


def load_profile(path: str | Path) -> TraceProfile:
    """Load a JSON profile, gunzipping it first when the name ends in ``.gz``.

    Raises:
        InvalidProfileError: If the file cannot be read, decompressed or
            decoded, or does not describe a valid profile.
    """
    path = Path(path)
    if not path.is_file():
        raise InvalidProfileError(f"{path} does not appear to be a file.")

    try:
        if path.suffix == ".gz":
            with gzip.open(path, "rt", encoding="utf-8") as fh:
                raw = json.load(fh)
        else:
            with path.open(encoding="utf-8") as fh:
                raw = json.load(fh)
    except (OSError, EOFError) as exc:
        raise InvalidProfileError(f"Could not read {path}: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidProfileError(f"Could not parse {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise InvalidProfileError(f"Could not parse {path}: expected a JSON object.")

    profile = TraceProfile(raw)
    logger.info("Loaded profile %s with %d threads", path, len(profile.threads))
    return profile
