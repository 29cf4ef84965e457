"""Create all tables for a quick dev setup (NOT for production)."""
from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

from loguru import logger  # noqa: E402

from segmentation import create_app  # noqa: E402
from segmentation.db.session import db  # noqa: E402


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()
        logger.info("Tables created.")


if __name__ == "__main__":
    main()
