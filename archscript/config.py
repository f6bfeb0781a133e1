from __future__ import annotations

import os

# Defaults
_DEFAULT_PROMPT = "> "
_DEFAULT_CONTINUATION_PROMPT = ". "
_DEFAULT_LOG_LEVEL = "WARNING"


def setting_from_env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    if not raw:
        return default
    return raw


def get_prompt() -> str:
    return setting_from_env("ARCHSCRIPT_PROMPT", _DEFAULT_PROMPT)


def get_continuation_prompt() -> str:
    return setting_from_env("ARCHSCRIPT_CONTINUATION_PROMPT", _DEFAULT_CONTINUATION_PROMPT)


def get_log_level() -> str:
    return setting_from_env("ARCHSCRIPT_LOG_LEVEL", _DEFAULT_LOG_LEVEL).upper()
