"""Flat file cache holding the last rendered card and its metadata."""

import logging
from pathlib import Path

from pydantic import ValidationError

from latest_card.exceptions import CacheError
from latest_card.schemas.article import CacheMeta

logger = logging.getLogger(__name__)


class CardCache:
    """
    Two files side by side: the PNG and a JSON copy of the metadata it shows.

    Writes overwrite both files; there is no expiry.
    """

    def __init__(self, image_path: Path, meta_path: Path):
        self.image_path = Path(image_path)
        self.meta_path = Path(meta_path)

    def load(self) -> tuple[CacheMeta, bytes] | None:
        """Return the cached metadata and image, or None on a miss."""
        if not (self.image_path.exists() and self.meta_path.exists()):
            return None
        try:
            meta = CacheMeta.model_validate_json(self.meta_path.read_bytes())
            image = self.image_path.read_bytes()
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable card cache: %s", e)
            return None
        return meta, image

    def save(self, meta: CacheMeta, image: bytes) -> None:
        """Overwrite the cached card and metadata."""
        try:
            self.image_path.parent.mkdir(parents=True, exist_ok=True)
            self.meta_path.parent.mkdir(parents=True, exist_ok=True)
            self.image_path.write_bytes(image)
            self.meta_path.write_text(
                meta.model_dump_json(by_alias=True), encoding="utf-8"
            )
        except OSError as e:
            raise CacheError(str(self.image_path.parent), e) from e
        logger.debug("Cached card at %s", self.image_path)
