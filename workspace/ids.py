import secrets


def new_id(taken=()) -> str:
    """24-char hex id, unique among `taken`."""
    while True:
        candidate = secrets.token_hex(12)
        if candidate not in taken:
            return candidate
