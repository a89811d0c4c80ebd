from __future__ import annotations

import argparse
import csv
import logging
import os
import statistics
import time
from dataclasses import dataclass
from typing import Callable, Dict, List

from instantiations.pyecc import make_she_params
from she import (
    CurveType,
    Params,
    add,
    build_tables,
    decrypt_g1,
    decrypt_g2,
    decrypt_gt,
    encrypt_g1,
    encrypt_g2,
    encrypt_gt,
    get_public_key,
    keygen,
    pairing_mul,
    precompute,
    serialize,
)

FIELDS = [
    "curve",
    "bound",
    "op",
    "warmup",
    "rep",
    "elapsed_ns",
    "ct_len_bytes",
    "pk_len_bytes",
    "sk_len_bytes",
]


@dataclass(frozen=True)
class BenchConfig:
    curve: CurveType
    bound: int
    warmup: int
    reps: int
    out: str
    message: int


def _timed_ns(fn: Callable[[], object]) -> int:
    t0 = time.perf_counter_ns()
    fn()
    return time.perf_counter_ns() - t0


def run(cfg: BenchConfig) -> None:
    params: Params = make_she_params(cfg.curve, bound=cfg.bound)

    # Table builds are one-off; keep them out of the per-op numbers.
    t_tables = _timed_ns(lambda: build_tables(params))
    print(f"dlog tables for bound={cfg.bound} built in {t_tables / 1e9:.2f}s")

    timings: Dict[str, List[int]] = {}

    os.makedirs(os.path.dirname(cfg.out) or ".", exist_ok=True)
    with open(cfg.out, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()

        for i in range(cfg.warmup + cfg.reps):
            is_warmup = 1 if i < cfg.warmup else 0
            rep = i if is_warmup else i - cfg.warmup
            held: Dict[str, object] = {}

            def row(op: str, elapsed_ns: int, ct_len: int = 0) -> None:
                if not is_warmup:
                    timings.setdefault(op, []).append(elapsed_ns)
                w.writerow(
                    {
                        "curve": cfg.curve.name,
                        "bound": cfg.bound,
                        "op": op,
                        "warmup": is_warmup,
                        "rep": rep,
                        "elapsed_ns": elapsed_ns,
                        "ct_len_bytes": ct_len,
                        "pk_len_bytes": params.pub_size,
                        "sk_len_bytes": params.sec_size,
                    }
                )

            def step(op: str, name: str, fn: Callable[[], object], ct_len: int = 0) -> None:
                t = _timed_ns(lambda: held.__setitem__(name, fn()))
                row(op, t, ct_len)

            step("KeyGen", "sec", lambda: keygen(params))
            sec = held["sec"]
            step("GetPublicKey", "pub", lambda: get_public_key(params, sec))
            step("Precompute", "ppub", lambda: precompute(params, held["pub"]))
            ppub = held["ppub"]

            m = cfg.message
            step("EncG1", "c1", lambda: encrypt_g1(params, ppub, m), params.g1_cipher_size)
            step("EncG2", "c2", lambda: encrypt_g2(params, ppub, m), params.g2_cipher_size)
            step("EncGT", "ct", lambda: encrypt_gt(params, ppub, m), params.gt_cipher_size)
            c1, c2, ct = held["c1"], held["c2"], held["ct"]

            step("AddG1", "s1", lambda: add(params, c1, c1), params.g1_cipher_size)
            step("AddGT", "st", lambda: add(params, ct, ct), params.gt_cipher_size)
            step("Mul", "prod", lambda: pairing_mul(params, c1, c2), params.gt_cipher_size)
            step("Serialize", "buf", lambda: serialize(params, ct), params.gt_cipher_size)

            step("DecG1", "d1", lambda: decrypt_g1(params, sec, c1), params.g1_cipher_size)
            step("DecG2", "d2", lambda: decrypt_g2(params, sec, c2), params.g2_cipher_size)
            step("DecGT", "dt", lambda: decrypt_gt(params, sec, held["prod"]), params.gt_cipher_size)

            if not is_warmup:
                assert held["d1"] == m and held["d2"] == m
                if abs(m * m) <= cfg.bound:
                    assert held["dt"] == m * m

    print(f"wrote {cfg.out}; median over {cfg.reps} rep(s):")
    for op, vals in timings.items():
        print(f"  {op:<13} {statistics.median(vals) / 1e6:10.2f} ms")


def main() -> None:
    ap = argparse.ArgumentParser(description="SHE benchmark harness (SNARK / BLS12_381).")

    ap.add_argument(
        "--curve",
        choices=[c.name for c in CurveType],
        default=CurveType.SNARK.name,
        help="Pairing curve",
    )
    ap.add_argument("--bound", type=int, default=1 << 20, help="Plaintext bound B")
    ap.add_argument("--message", type=int, default=1000, help="Plaintext used for every op")

    ap.add_argument("--warmup", type=int, default=1)
    ap.add_argument("--reps", type=int, default=10)
    ap.add_argument("--out", type=str, default="bench/outputs/out.csv")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log table/engine setup")
    args = ap.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    cfg = BenchConfig(
        curve=CurveType[args.curve],
        bound=args.bound,
        warmup=args.warmup,
        reps=args.reps,
        out=args.out,
        message=args.message,
    )
    run(cfg)


if __name__ == "__main__":
    main()
