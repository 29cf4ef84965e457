"""Development server entry point."""
from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

from segmentation import create_app  # noqa: E402
from segmentation.config import BaseConfig  # noqa: E402

config = BaseConfig()
app = create_app(config)


if __name__ == "__main__":
    app.run(host=config.HOST, port=config.PORT)
