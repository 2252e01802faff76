"""Compare analytic cost gradients with central differences on random networks."""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from statistics import mean

LAMBDAS = [0.0, 0.1, 1.0]


def main(argv=None):
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))

    import numpy as np

    from symbolnet.config import NetConfig, build_net
    from symbolnet.training.gradcheck import check_gradient

    ap = argparse.ArgumentParser(description="Compare analytic and numerical cost gradients")
    ap.add_argument("--layers", nargs="+", type=int, default=[3, 4, 2])
    ap.add_argument("--samples", type=int, default=5)
    ap.add_argument("--seeds", nargs="+", type=int, default=[0, 1, 2])
    ap.add_argument("--lambdas", nargs="+", type=float, default=LAMBDAS)
    ap.add_argument("--epsilon", type=float, default=1e-5)
    ap.add_argument("--tolerance", type=float, default=1e-5)
    ap.add_argument("--out", type=str, default=".artifacts/gradcheck")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    log = logging.getLogger("gradcheck")

    config = NetConfig.from_mapping({"layer_sizes": args.layers})
    net = build_net(config)
    out = Path(args.out)
    out.mkdir(parents=True, exist_ok=True)
    runs = []
    for seed in args.seeds:
        rng = np.random.default_rng(seed)
        inputs = rng.standard_normal((args.samples, net.layout.input_size))
        targets = rng.integers(0, net.layout.output_size, size=args.samples)
        point = net.random_point(rng, epsilon=1.0)
        for lam in args.lambdas:
            resolved = replace(config, regularization_lambda=lam)
            fn = net.cost_function(inputs, targets, resolved.regularization_lambda)
            check = check_gradient(fn, point, epsilon=args.epsilon)
            runs.append(
                {
                    "seed": seed,
                    "lambda": lam,
                    "config": resolved.to_dict(),
                    "cost": fn.evaluate(point),
                    "relative_error": check.relative_error,
                    "max_abs_diff": check.max_abs_diff,
                    "passed": check.passed(args.tolerance),
                }
            )
            log.info("seed=%d lambda=%g relative_error=%.3e", seed, lam, check.relative_error)
    (out / "results.jsonl").write_text(
        "\n".join(json.dumps(x) for x in runs), encoding="utf-8"
    )

    csv_path = out / "gradcheck.csv"
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["lambda", "seeds", "relative_error_mu", "relative_error_max", "passed"])
        for lam in args.lambdas:
            errs = [r["relative_error"] for r in runs if r["lambda"] == lam]
            ok = all(r["passed"] for r in runs if r["lambda"] == lam)
            w.writerow([lam, len(errs), f"{mean(errs):.3e}", f"{max(errs):.3e}", ok])

    md_path = out / "gradcheck.md"
    lines = []
    lines.append("### Gradient check: analytic vs central differences")
    lines.append("")
    lines.append(
        f"- Layers: `{args.layers}`; Samples: `{args.samples}`; "
        f"Seeds: `{args.seeds}`; Epsilon: `{args.epsilon}`"
    )
    lines.append("")
    lines.append("| Lambda | Rel. Error (mean) | Rel. Error (max) | Passed |")
    lines.append("|---:|---:|---:|:---:|")
    for lam in args.lambdas:
        errs = [r["relative_error"] for r in runs if r["lambda"] == lam]
        ok = all(r["passed"] for r in runs if r["lambda"] == lam)
        lines.append(f"| {lam:g} | {mean(errs):.3e} | {max(errs):.3e} | {'yes' if ok else 'no'} |")
    md_path.write_text("\n".join(lines), encoding="utf-8")
    print("Wrote:", csv_path, md_path)
    return 0 if all(r["passed"] for r in runs) else 1


if __name__ == "__main__":
    sys.exit(main())
