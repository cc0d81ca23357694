import logging
import os

import uvicorn

from extrafields.bootstrap import load_environment
from extrafields.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

try:
    load_environment(require=os.getenv("EXTRAFIELDS_REQUIRE_ENV_FILE", "").lower() in ("1", "true", "yes"))
except ConfigurationError as e:
    logging.basicConfig(level=logging.ERROR)
    logger.error(f"{e.error_code.value}: {e.message}")
    raise SystemExit(1) from e

# Settings are read on import, so the environment must be loaded first
from extrafields.main import create_app  # noqa: E402

app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8000")))
