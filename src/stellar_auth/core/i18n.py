"""Localized user-facing error messages."""

from __future__ import annotations

from stellar_auth.core.errors import ErrorKind

FALLBACK_LANGUAGE = "en"

MESSAGES: dict[str, dict[ErrorKind, str]] = {
    "en": {
        ErrorKind.MISSING_FIELDS: "Missing required fields",
        ErrorKind.INVALID_ADDRESS_FORMAT: "Invalid Stellar address format",
        ErrorKind.NONCE_EXPIRED_OR_MISSING: "Invalid or expired nonce",
        ErrorKind.INVALID_SIGNATURE: "Invalid signature",
        ErrorKind.SESSION_INVALID_OR_EXPIRED: "Unauthorized",
        ErrorKind.INTERNAL_FAILURE: "Internal Server Error",
    },
    "es": {
        ErrorKind.MISSING_FIELDS: "Faltan campos obligatorios",
        ErrorKind.INVALID_ADDRESS_FORMAT: "Formato de dirección Stellar no válido",
        ErrorKind.NONCE_EXPIRED_OR_MISSING: "Nonce no válido o caducado",
        ErrorKind.INVALID_SIGNATURE: "Firma no válida",
        ErrorKind.INTERNAL_FAILURE: "Error interno del servidor",
    },
}


def parse_accept_language(header: str | None) -> list[str]:
    """Return primary language tags from an Accept-Language header, best first.

    Malformed quality values rank the entry last instead of failing the request.
    """
    if not header:
        return []

    weighted: list[tuple[float, int, str]] = []
    for position, part in enumerate(header.split(",")):
        pieces = [piece.strip() for piece in part.split(";")]
        tag = pieces[0].lower()
        if not tag or tag == "*":
            continue
        quality = 1.0
        for param in pieces[1:]:
            if param.startswith("q="):
                try:
                    quality = float(param[2:])
                except ValueError:
                    quality = 0.0
        if quality <= 0:
            continue
        weighted.append((-quality, position, tag.split("-")[0]))

    weighted.sort()
    return [tag for _, _, tag in weighted]


def select_language(header: str | None, default: str = FALLBACK_LANGUAGE) -> str:
    """Pick the first supported language the caller asked for."""
    for tag in parse_accept_language(header):
        if tag in MESSAGES:
            return tag
    return default if default in MESSAGES else FALLBACK_LANGUAGE


def translate(kind: ErrorKind, language: str) -> str:
    """Return the message for ``kind`` in ``language``, falling back to English."""
    catalog = MESSAGES.get(language, MESSAGES[FALLBACK_LANGUAGE])
    return catalog.get(kind) or MESSAGES[FALLBACK_LANGUAGE][kind]
