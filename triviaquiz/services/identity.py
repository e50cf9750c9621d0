import base64
import hashlib


def contestant_identity(name: str, quiz_id: str, group: str) -> str:
    """
    Derives the contestant id from (name, quiz, group).
    Quiz and group are case-insensitive, the name is not. The result is
    URL-safe base64 without padding, so it can sit in a path or a cookie.
    """
    key = f"{name}-{quiz_id.lower()}-{group.lower()}"
    digest = hashlib.md5(key.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
