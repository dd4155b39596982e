"""Python packages for the APM application directory.

``apm_schemas`` holds the record models, ``apm_tools`` the store, search
engine and converters, and ``apm_cli`` the command-line front end.
"""

from __future__ import annotations

from .env import load_env

__all__ = ["load_env"]
