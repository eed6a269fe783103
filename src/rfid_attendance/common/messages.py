"""Localized user-facing messages for devices and API clients.

Keys are dotted paths (``"scan.signedIn"``). Unknown languages fall back to
English, unknown keys fall back to the key itself.
"""

from __future__ import annotations

from typing import Callable, Optional, Union

from ..core.constants import DEFAULT_LANGUAGE

Message = Union[str, Callable[..., str]]

MESSAGES: dict[str, dict[str, dict[str, Message]]] = {
    "en": {
        "scan": {
            "missingFields": "uid and device_uid are required.",
            "uidNotRegistered": "New UID - registration required",
            "registerNow": "Register now",
            "outsideTime": "Outside allowed sign-in/sign-out time",
            "outsideFlag": "Outside Time",
            "signInFirst": "Sign-in required before sign-out",
            "signInFlag": "SignIn 1st",
            "signedIn": "Signed in",
            "lateSignIn": "You signed in late",
            "signedOut": "Signed out",
            "earlySignOut": "You signed out early",
            "error": "Error during scan processing",
            "errorFlag": "Error",
            "failed": "Scan failed",
            "deviceRequired": "device_uid is required",
            "mismatch": lambda school: f'"{school}" student here',
        },
        "timeSettings": {
            "notFound": "Time settings not found for this school.",
            "invalid": "Time settings for this school are invalid.",
            "flag": "No Schedule",
        },
        "alert": {
            "mismatchSubject": "Tag scanned at another school",
            "mismatchBody": lambda name, uid, device: (
                f"{name} (tag {uid}) was scanned on device {device}, which is registered to another school.\n\n"
                "If this is unexpected, please check the tag assignment."
            ),
        },
    },
    "fr": {
        "scan": {
            "missingFields": "uid et device_uid sont requis.",
            "uidNotRegistered": "Nouvel UID - enregistrement requis",
            "registerNow": "Enregistrez maintenant",
            "outsideTime": "En dehors des heures autorisées de pointage",
            "outsideFlag": "Hors temps",
            "signInFirst": "Connexion requise avant déconnexion",
            "signInFlag": "Connectez-vous d'abord",
            "signedIn": "Connecté",
            "lateSignIn": "Vous vous êtes connecté en retard",
            "signedOut": "Déconnecté",
            "earlySignOut": "Vous êtes parti en avance",
            "error": "Erreur lors du traitement du scan",
            "errorFlag": "Erreur",
            "failed": "Échec du scan",
            "deviceRequired": "device_uid est requis",
            "mismatch": lambda school: f'"{school}" élève ici',
        },
        "timeSettings": {
            "notFound": "Horaires introuvables pour cette école.",
            "invalid": "Horaires invalides pour cette école.",
            "flag": "Pas d'horaire",
        },
    },
}


def _lookup(lang: str, key: str) -> Optional[Message]:
    node: object = MESSAGES.get(lang)
    for part in key.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node  # type: ignore[return-value]


def get_message(lang: Optional[str], key: str, *args) -> str:
    message = _lookup(lang or DEFAULT_LANGUAGE, key)
    if message is None:
        message = _lookup(DEFAULT_LANGUAGE, key)
    if message is None:
        return key
    if callable(message):
        return message(*args)
    return message


def language_from_header(header: Optional[str]) -> str:
    """Pick the primary language tag of an ``Accept-Language`` header."""
    if not header:
        return DEFAULT_LANGUAGE
    first = header.split(",")[0].split(";")[0].strip().lower()
    primary = first.split("-")[0]
    return primary if primary in MESSAGES else DEFAULT_LANGUAGE
