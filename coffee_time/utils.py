from __future__ import annotations
import os, math, platform
from typing import Mapping, Optional

EMOJI_TERMINALS = ("Apple_Terminal", "vscode")

def format_remaining(remaining_seconds: float) -> str:
    """
    Whole minutes left, rounded up: 61s -> '2 minutes', 60s -> '1 minute'.
    """
    total_seconds = max(0, math.ceil(remaining_seconds))
    minutes = math.ceil(total_seconds / 60)
    unit = "minute" if minutes == 1 else "minutes"
    return f"{minutes} {unit}"

def env_flag(name: str, env: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if env is None else env
    return env.get(name) == "1"

def supports_emoji(env: Optional[Mapping[str, str]] = None, release: Optional[str] = None) -> bool:
    env = os.environ if env is None else env
    if env_flag("COFFEE_TIME_FORCE_ASCII", env):
        return False
    if env_flag("COFFEE_TIME_FORCE_EMOJI", env):
        return True
    release = platform.release() if release is None else release
    is_wsl = "microsoft" in release.lower()
    return (
        env.get("TERM_PROGRAM") in EMOJI_TERMINALS
        or bool(env.get("WT_SESSION"))
        or is_wsl
    )
