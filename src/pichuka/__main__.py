"""Open the PICHUKA game window."""

import logging

from .engine import PichukaEngine


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    PichukaEngine().run()


if __name__ == "__main__":
    main()
