"""Normalization of the identity provider's user ids."""


def normalize_external_id(external_id: str | None) -> str:
    """Strip surrounding whitespace so stored and looked-up ids always agree.

    Returns an empty string for a missing id.
    """
    return (external_id or "").strip()
