"""
Bootstrap environment for Streamlit Cloud & local dev:
- Flatten st.secrets into uppercase os.environ keys (nested -> PREFIX_CHILD)
- Then load .env (without overriding existing env vars)
"""

from __future__ import annotations

import os
import re
from typing import Iterator, Tuple

import streamlit as st
from dotenv import load_dotenv


def _sanitize_key(key: str) -> str:
    # Uppercase and replace non-alphanumeric with underscores
    return re.sub(r"[^A-Za-z0-9_]", "_", key.upper())


def _flatten_secrets(prefix: str, val) -> Iterator[Tuple[str, str]]:
    if isinstance(val, dict):
        for k, v in val.items():
            yield from _flatten_secrets(f"{prefix}_{k}", v)
    elif isinstance(val, (list, tuple)):
        # HAPPINESS_YEARS = ["2020", "2021"] in secrets.toml
        yield _sanitize_key(prefix), ",".join(str(v) for v in val)
    else:
        yield _sanitize_key(prefix), str(val)


def _bridge_secrets_to_env() -> None:
    try:
        # st.secrets raises when no secrets.toml is present
        items = getattr(st, "secrets", None)
        if not items:
            return
        try:
            secrets_dict = items.to_dict()  # type: ignore[attr-defined]
        except AttributeError:
            secrets_dict = dict(items)
    except Exception:
        return

    for key, value in secrets_dict.items():
        for flat_k, flat_v in _flatten_secrets(key, value):
            os.environ.setdefault(flat_k, flat_v)


def ensure_env() -> None:
    """Idempotent: make sure env vars are available.
    Safe to call multiple times, both inside and outside Streamlit runtime.
    """
    _bridge_secrets_to_env()
    # load_dotenv will not override existing env vars by default
    load_dotenv()

# Execute on import for Streamlit main process, but also allow explicit calls elsewhere.
ensure_env()
