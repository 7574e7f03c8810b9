"""
Study 01: Always Feed Observation

Run: python -m generative_pomdp.studies.01_always_feed.observe

Start the baby full, feed it every step, and watch.
The policy never listens, so what we hear changes nothing.

The policy comes from the config (always_feed unless told otherwise),
so the same run can be repeated with any registered policy.
"""

import argparse
import logging
from typing import Optional, Sequence

from generative_pomdp.config import SimulationConfig, build_policy, load_default_config
from generative_pomdp.simulation.batch import spawn_generators
from generative_pomdp.simulation.simulator import HistoryRecorder, SimHistory


def _label(value) -> str:
    """Short human label for the Crying Baby's named types."""
    for attr, yes, no in (
        ("hungry", "hungry", "full"),
        ("feed", "feed", "wait"),
        ("crying", "crying", "quiet"),
    ):
        if hasattr(value, attr):
            return yes if getattr(value, attr) else no
    return str(value)


def run_study(
    steps: Optional[int] = None,
    seed: Optional[int] = None,
    config: Optional[SimulationConfig] = None,
    policy_name: Optional[str] = None
) -> SimHistory:
    """
    Run the canonical always-feed simulation.

    Watch:
    - The state before each step (always full)
    - The reward (always the cost of feeding)
    - The observation (occasional crying, ignored)
    """
    config = config or load_default_config()
    steps = steps if steps is not None else config.max_steps
    seed = seed if seed is not None else config.seed
    policy_name = policy_name or config.policy

    print("=" * 50)
    print("Study 01: Always Feed")
    print("=" * 50)

    model = config.build_model()
    # The policy draws from its own stream, never the model's
    policy = build_policy(policy_name, spawn_generators(seed, 1)[0])

    print(f"\nModel: {model}")
    print(f"Policy: {policy}")
    print(f"Running {steps} steps (seed={seed})...\n")

    recorder = HistoryRecorder(steps, seed=seed)
    history = recorder.simulate(model, policy)

    print(f"{'t':>3}  {'state':>7}  {'action':>6}  {'heard':>7}  {'reward':>7}")
    for record in history:
        print(
            f"{record.t:>3}  {_label(record.state):>7}  {_label(record.action):>6}  "
            f"{_label(record.observation):>7}  {record.reward:>7.1f}"
        )

    cries = sum(1 for o in history.observations() if o.crying)

    print("\n" + "=" * 50)
    print("Observations")
    print("=" * 50)
    print(f"\nCrying heard: {cries} / {len(history)}")
    print(f"Undiscounted reward: {history.undiscounted_reward():.2f}")
    print(f"Discounted reward (gamma={history.discount}): {history.discounted_reward():.3f}")

    return history


def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(description="Always Feed Observation Study")
    parser.add_argument("--steps", type=int, default=None, help="Simulation steps")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--policy", type=str, default=None, help="Registered policy name (overrides config)")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--verbose", action="store_true", help="Log every step")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    config = SimulationConfig.from_yaml(args.config) if args.config else None
    run_study(steps=args.steps, seed=args.seed, config=config, policy_name=args.policy)


if __name__ == "__main__":
    main()
