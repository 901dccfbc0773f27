"""One-shot load of the hot index from blob storage."""

from __future__ import annotations

import argparse

from loguru import logger

from emojistore.domain.exceptions import EmojiStoreError
from emojistore.infrastructure import build_container, configure_logging, get_settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Load the emoji index from blob storage")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Remove the sentinel first so every blob is reloaded",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)
    container = build_container(settings)

    try:
        if args.force:
            container.reconcile.reset()
        result = container.reconcile.run()
    except EmojiStoreError as e:
        logger.error(f"Reconciliation failed: {e}")
        return 1
    finally:
        container.close()

    if result.already_initialized:
        print("Index already initialized; nothing to do (use --force to resync)")
    else:
        print(f"Loaded {result.created_count} blobs into the index")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
