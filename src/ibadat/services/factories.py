"""Factory helpers that instantiate services based on configuration.

These helpers honor the settings declared in :mod:`ibadat.settings` and
raise ``NotImplementedError`` when a backend name is not recognised.
"""

from __future__ import annotations

from ibadat.normalization.canonicalizer import Canonicalizer, get_canonicalizer
from ibadat.settings import Settings, get_settings

from .extraction import RuleBasedDeedExtractor
from .intake import DeedExtractor, DeedIntakeService


def build_deed_extractor(
    *,
    settings: Settings | None = None,
    canonicalizer: Canonicalizer | None = None,
) -> DeedExtractor | None:
    """Return the chat-log extractor named by ``intake.extractor_backend``.

    ``"none"`` returns ``None``, which makes chat-log import fail with
    :class:`~ibadat.services.intake.IntakeError`.
    """

    settings = settings or get_settings()
    backend = settings.intake.extractor_backend
    if backend == "rules":
        return RuleBasedDeedExtractor(canonicalizer or get_canonicalizer())

    if backend == "none":
        return None

    raise NotImplementedError(f"Unsupported chat-log extractor backend '{backend}'")


def build_intake_service(*, settings: Settings | None = None) -> DeedIntakeService:
    """Instantiate a :class:`DeedIntakeService` wired with the configured extractor."""

    settings = settings or get_settings()
    canonicalizer = get_canonicalizer()
    return DeedIntakeService(
        canonicalizer=canonicalizer,
        extractor=build_deed_extractor(settings=settings, canonicalizer=canonicalizer),
        settings=settings,
    )


__all__ = ["build_deed_extractor", "build_intake_service"]
