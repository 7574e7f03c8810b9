"""
Study 02: Feed When Crying Observation

Run: python -m generative_pomdp.studies.02_feed_when_crying.observe

Three policies, same baby, same seed:
always feed, feed when crying, and a coin flip.

Trajectory count, length, seed and thread pool size come from the
config (configs/feed_when_crying.yaml unless --config is given);
command-line flags override it.
"""

import argparse
import logging
from typing import Dict, Optional, Sequence

from generative_pomdp.config import POLICIES, SimulationConfig, load_packaged_config
from generative_pomdp.simulation.batch import simulate_batch, summarize

COMPARED_POLICIES = ("always_feed", "feed_when_crying", "random")


def run_study(
    trajectories: Optional[int] = None,
    steps: Optional[int] = None,
    seed: Optional[int] = None,
    workers: Optional[int] = None,
    config: Optional[SimulationConfig] = None
) -> Dict[str, Dict[str, float]]:
    """
    Compare policies by their returns.

    Every policy sees trajectories spawned from the same seed,
    so the comparison is paired, not just averaged.
    """
    config = config or load_packaged_config("feed_when_crying")
    trajectories = trajectories if trajectories is not None else config.num_trajectories
    steps = steps if steps is not None else config.max_steps
    seed = seed if seed is not None else config.seed
    workers = workers if workers is not None else config.max_workers
    model = config.build_model()

    print("=" * 50)
    print("Study 02: Feed When Crying")
    print("=" * 50)
    print(f"\nModel: {model}")
    print(f"{trajectories} trajectories x {steps} steps (seed={seed})\n")

    results = {}
    for name in COMPARED_POLICIES:
        histories = simulate_batch(
            model,
            POLICIES[name],
            n=trajectories,
            max_steps=steps,
            seed=seed,
            max_workers=workers,
        )
        results[name] = summarize(histories)

    print(f"{'policy':>18}  {'mean':>9}  {'std':>8}  {'min':>9}  {'max':>9}")
    for name, stats in results.items():
        marker = "*" if name == config.policy else " "
        print(
            f"{marker}{name:>17}  {stats['mean_discounted']:>9.2f}  {stats['std_discounted']:>8.2f}  "
            f"{stats['min_discounted']:>9.2f}  {stats['max_discounted']:>9.2f}"
        )

    best = max(results, key=lambda n: results[n]["mean_discounted"])

    print("\n" + "=" * 50)
    print(f"Best mean discounted return: {best}")
    print(f"Configured policy ({config.policy}) marked with *")
    print("=" * 50)

    return results


def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(description="Feed When Crying Comparison Study")
    parser.add_argument("--trajectories", type=int, default=None, help="Trajectories per policy")
    parser.add_argument("--steps", type=int, default=None, help="Steps per trajectory")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--workers", type=int, default=None, help="Thread pool size")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--verbose", action="store_true", help="Log batch progress")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    config = SimulationConfig.from_yaml(args.config) if args.config else None
    run_study(
        trajectories=args.trajectories,
        steps=args.steps,
        seed=args.seed,
        workers=args.workers,
        config=config,
    )


if __name__ == "__main__":
    main()
