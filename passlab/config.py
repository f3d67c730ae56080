# passlab/config.py
"""
Simple settings persistence for PassLab.
Settings saved as JSON in %APPDATA%/PassLab/config.json (Windows) or ~/.passlab/config.json (fallback).
PASSLAB_CONFIG points at a different file.
Only settings live here; passwords and results are never written anywhere.
"""

import os
import json
import logging
from typing import Dict, Any

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "default_scenario": None,  # None shows every canonical scenario
    "use_wordlist": False,
    "wordlist_path": None,  # if None, the bundled list is used
    "log_level": "WARNING",
}

def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, "PassLab")
    return os.path.join(os.path.expanduser("~"), ".passlab")

def config_path() -> str:
    return os.getenv("PASSLAB_CONFIG") or os.path.join(_appdata_dir(), "config.json")

def load_config() -> Dict[str, Any]:
    p = config_path()
    if not os.path.exists(p):
        return DEFAULTS.copy()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", p, e)
        return DEFAULTS.copy()
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", p)
        return DEFAULTS.copy()
    # merge defaults
    out = DEFAULTS.copy()
    out.update(data)
    return out

def save_config(cfg: Dict[str, Any]) -> None:
    p = config_path()
    d = os.path.dirname(p)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)
