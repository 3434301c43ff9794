from __future__ import annotations

import os

import uvicorn
from dotenv import load_dotenv

# Environment from .env must be in place before the app reads its configuration
load_dotenv()

from qa_service.application.app import App  # noqa: E402

app = App()


def main() -> None:
    uvicorn.run(
        app,
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "8000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
