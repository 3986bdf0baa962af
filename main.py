from __future__ import annotations

import uvicorn

from omnipulse.api.app import app
from omnipulse.core.logging import setup_logging


setup_logging()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
