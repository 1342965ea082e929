"""Logo asset resolution."""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, Union

logger = logging.getLogger("invoicekit.rendering.assets")

DEFAULT_LOGO_CANDIDATES = (
    "assets/logo.png",
    "assets/logo.jpg",
    "public/images/logo.png",
)


class AssetResolver(ABC):
    """Resolves the company logo to raw image bytes."""

    @abstractmethod
    def resolve_logo(self) -> Optional[bytes]:
        """Return logo bytes, or None when no logo is available."""


class StaticAssetResolver(AssetResolver):
    """Resolver returning fixed bytes (or nothing)."""

    def __init__(self, logo: Optional[bytes] = None):
        self.logo = logo

    def resolve_logo(self) -> Optional[bytes]:
        return self.logo


class FileAssetResolver(AssetResolver):
    """Resolver that tries candidate paths in order; the first existing file wins."""

    def __init__(self, candidates: Sequence[Union[str, Path]] = DEFAULT_LOGO_CANDIDATES):
        self.candidates = [Path(c) for c in candidates]

    @classmethod
    def from_environment(cls, extra: Optional[Union[str, Path]] = None) -> "FileAssetResolver":
        """Build a resolver that checks ``extra``, then INVOICEKIT_LOGO_PATH, then the defaults."""
        candidates: list[Union[str, Path]] = []
        if extra:
            candidates.append(extra)
        env_path = os.environ.get("INVOICEKIT_LOGO_PATH")
        if env_path:
            candidates.append(env_path)
        candidates.extend(DEFAULT_LOGO_CANDIDATES)
        return cls(candidates)

    def resolve_logo(self) -> Optional[bytes]:
        for candidate in self.candidates:
            if not candidate.is_file():
                logger.debug("Logo candidate %s not found", candidate)
                continue
            try:
                data = candidate.read_bytes()
            except OSError as e:
                logger.warning("Could not read logo %s: %s", candidate, e)
                continue
            logger.debug("Using logo %s", candidate)
            return data
        logger.info("No logo asset found; using text wordmark")
        return None
