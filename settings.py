# settings.py

import os

from dotenv import load_dotenv

load_dotenv()

def _get_env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or val.strip() == "":
        return default
    try:
        return int(val)
    except ValueError:
        return default

def _get_env_float(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None or val.strip() == "":
        return default
    try:
        return float(val)
    except ValueError:
        return default

def _fp_rate(name: str, default: float) -> float:
    p = _get_env_float(name, default)
    # anything outside (0, 1) cannot size a filter
    return p if 0.0 < p < 1.0 else default

# BLAKE2b accepts keys of at most 64 bytes; below 16 the key is guessable
KEY_BYTES_MIN = 16
KEY_BYTES_MAX = 64

DEFAULT_FP_RATE   = _fp_rate("BLOOM_FP_RATE", 0.01)
KEY_BYTES         = min(max(_get_env_int("BLOOM_KEY_BYTES", 16), KEY_BYTES_MIN), KEY_BYTES_MAX)

TOOL_ITEMS        = _get_env_int("BLOOM_TOOL_ITEMS", 10_000)
TOOL_PROBES       = _get_env_int("BLOOM_TOOL_PROBES", 100_000)
