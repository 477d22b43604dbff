"""maillink - Gmail deep links for CRM email records"""

from __future__ import annotations

__version__ = "0.1.0"


def __getattr__(name: str):
    """
    Lazy imports to avoid loading config and pydantic when only importing lightweight modules.
    """
    if name in ("DeepLinkResolver", "resolve_link", "resolve_url", "search_url_for"):
        from maillink.gmail import link_resolver

        return getattr(link_resolver, name)
    if name in ("EmailLinkRecord", "ResolvedLink", "LinkTier"):
        from maillink.gmail import models

        return getattr(models, name)
    if name in ("TokenClass", "encode_legacy_id"):
        from maillink.gmail import token_encoder

        return getattr(token_encoder, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "DeepLinkResolver",
    "EmailLinkRecord",
    "LinkTier",
    "ResolvedLink",
    "TokenClass",
    "encode_legacy_id",
    "resolve_link",
    "resolve_url",
    "search_url_for",
]
