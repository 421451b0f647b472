# tools/measure_fp.py

import json
import sys
import time

from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import settings

from tinybloom import TinyBloom


def measure(n: int, p: float, probes: int) -> dict:
    """
    Fill a fresh filter with n distinct items, then count how many of
    `probes` never-inserted items it claims to contain.
    """
    with TinyBloom.for_capacity(n, p) as bloom:
        t0 = time.perf_counter()
        for i in range(n):
            bloom.insert(f"item-{i}")
        t_insert = time.perf_counter() - t0

        missed = sum(1 for i in range(n) if f"item-{i}" not in bloom)

        t0 = time.perf_counter()
        fp = sum(1 for i in range(probes) if f"absent-{i}" in bloom)
        t_query = time.perf_counter() - t0

        return {
            "target_fp_rate": p,
            "measured_fp_rate": fp / max(probes, 1),
            "false_negatives": missed,
            "insert_us_per_item": round(t_insert / max(n, 1) * 1e6, 3),
            "query_us_per_item": round(t_query / max(probes, 1) * 1e6, 3),
            "info": bloom.info().model_dump(),
        }


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    n = int(args[0]) if len(args) > 0 else settings.TOOL_ITEMS
    p = float(args[1]) if len(args) > 1 else settings.DEFAULT_FP_RATE
    probes = int(args[2]) if len(args) > 2 else settings.TOOL_PROBES

    print(f"[measure_fp] n={n} p={p} probes={probes}")
    report = measure(n, p, probes)
    print(json.dumps(report, indent=2))

    ratio = report["measured_fp_rate"] / p
    print(f"[measure_fp] measured/target = {ratio:.2f}")
    return report


if __name__ == "__main__":
    main()
