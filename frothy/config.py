from __future__ import annotations
import os


_TRUTHY = {"1", "true", "yes", "on"}

# Defaults
DEFAULT_MAX_CALL_DEPTH = 100
DEFAULT_REPL_HOST = "127.0.0.1"
DEFAULT_REPL_PORT = 8765


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def flag_from_env(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def get_max_call_depth() -> int:
    depth = int_from_env("FROTHY_MAX_CALL_DEPTH", DEFAULT_MAX_CALL_DEPTH)
    if depth < 1:
        raise ValueError("FROTHY_MAX_CALL_DEPTH must be at least 1")
    return depth


def get_strict_stack() -> bool:
    return flag_from_env("FROTHY_STRICT_STACK")


def get_repl_address() -> tuple[str, int]:
    host = os.environ.get("FROTHY_REPL_HOST") or DEFAULT_REPL_HOST
    return host, int_from_env("FROTHY_REPL_PORT", DEFAULT_REPL_PORT)
