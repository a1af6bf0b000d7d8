from __future__ import annotations


# Log-safe destination: only the last few characters of a phone number survive.
def dest_hint(v: str, keep: int = 4) -> str:
    v = (v or "").strip()
    if not v:
        return ""
    if len(v) <= keep:
        return v
    return f"...{v[-keep:]}"


def mask_secret(v: str, keep: int = 4) -> str:
    v = v or ""
    if len(v) <= keep:
        return "*" * len(v)
    return f"{v[:keep]}{'*' * (len(v) - keep)}"
