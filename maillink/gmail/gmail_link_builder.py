"""
Gmail Link Builder - Assemble Gmail web URLs for view tokens and searches

Provides:
1. Token links:  https://mail.google.com/mail/u/{n}/#all/{token}
2. Search links: https://mail.google.com/mail/u/{n}/#search/{query}

When no account index is known the /u/{n}/ segment is omitted and Gmail opens
the default signed-in account: https://mail.google.com/mail/#all/{token}

Fragments are percent-encoded with encodeURIComponent rules, so real Gmail
tokens pass through unchanged and spaces in queries become %20.
"""

from __future__ import annotations

from urllib.parse import quote

from maillink import config
from maillink.gmail.token_encoder import TokenClass, encode_legacy_id

# Characters encodeURIComponent leaves alone (on top of quote's A-Za-z0-9_.-~)
_URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


class GmailLinkBuilder:
    """Build Gmail URLs for view tokens and searches"""

    @classmethod
    def base_url(cls, account_index: int | None = None) -> str:
        """
        Gmail base URL, scoped to one signed-in account when an index is given.

        Args:
            account_index: Position of the account in Gmail's account switcher
                (matches /mail/u/{n}/), or None for the generic base path

        Returns:
            Base URL ending in "/"

        Raises:
            ValueError: If account_index is negative
        """
        if account_index is None:
            return f"https://{config.WEBMAIL_HOST}/mail/"
        if isinstance(account_index, bool) or account_index < 0:
            raise ValueError(f"account_index must be a non-negative int, got {account_index!r}")
        return f"https://{config.WEBMAIL_HOST}/mail/u/{account_index}/"

    @classmethod
    def token_link(cls, token: str, account_index: int | None = None) -> str:
        """
        Build a link that opens one conversation from any folder.

        Args:
            token: Gmail web UI view token (already in native form)
            account_index: Optional account scoping

        Returns:
            Full Gmail URL using the #all/ view

        Side Effects:
            None (pure function - builds URL string only)
        """
        # #all/ finds the email in any folder, archived included
        return f"{cls.base_url(account_index)}#all/{encode_uri_component(token)}"

    @classmethod
    def search_link(cls, query: str, account_index: int | None = None) -> str:
        """
        Build Gmail search link.

        Args:
            query: Gmail search query (will be URL-encoded)
            account_index: Optional account scoping

        Returns:
            Full Gmail search URL

        Side Effects:
            None (pure function - builds and encodes URL string only)
        """
        return f"{cls.base_url(account_index)}#search/{encode_uri_component(query)}"

    @classmethod
    def legacy_id_link(
        cls,
        legacy_id: str,
        token_class: TokenClass,
        account_index: int | None = None,
    ) -> str | None:
        """
        Encode a Gmail API hex id and build its token link.

        Returns:
            Full Gmail URL, or None if the id could not be encoded
        """
        token = encode_legacy_id(legacy_id, token_class)
        if not token:
            return None
        return cls.token_link(token, account_index)


def url_for_legacy_id(
    legacy_id: str,
    token_class: TokenClass = TokenClass.THREAD,
    account_index: int | None = None,
) -> str | None:
    """Convenience function for building a token link from a hex id

    Side Effects:
        None (pure function - delegates to GmailLinkBuilder)
    """
    return GmailLinkBuilder.legacy_id_link(legacy_id, token_class, account_index)
