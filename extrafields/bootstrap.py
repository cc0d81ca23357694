"""
Environment discovery for the process entry points.

Only ``main.py`` and the CLI call into this module; the rest of the
package reads the explicit ``Settings`` object.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

from extrafields.exceptions import ConfigurationError, ErrorCode

logger = logging.getLogger(__name__)

ENV_FILENAME = ".env"

# Ancestor levels searched from the package directory, in order:
# project root, its parent, the package directory itself, an install root
CANDIDATE_LEVELS = (1, 2, 0, 3)


def candidate_paths(start: Path | None = None, filename: str = ENV_FILENAME) -> list[Path]:
    start = (start or Path(__file__)).resolve()
    if start.is_file():
        start = start.parent
    parents = [start, *start.parents]
    return [parents[level] / filename for level in CANDIDATE_LEVELS if level < len(parents)]


def discover_env_file(start: Path | None = None, filename: str = ENV_FILENAME) -> Path | None:
    """Return the first existing candidate, or None."""
    for candidate in candidate_paths(start, filename):
        if candidate.is_file():
            return candidate
    return None


def load_environment(start: Path | None = None, require: bool = False) -> Path | None:
    """
    Load the discovered ``.env`` into the process environment.

    Raises ConfigurationError (CONFIG_NOT_FOUND) when ``require`` is set and
    no candidate exists. Variables already set in the environment win.
    """
    env_file = discover_env_file(start)
    if env_file is None:
        if require:
            searched = ", ".join(str(path) for path in candidate_paths(start))
            raise ConfigurationError(
                f"Could not locate {ENV_FILENAME}. Searched: {searched}",
                error_code=ErrorCode.CONFIG_NOT_FOUND,
            )
        logger.debug("No %s found, using process environment only", ENV_FILENAME)
        return None

    load_dotenv(env_file, override=False)
    logger.info("Loaded environment from %s", env_file)
    return env_file
