import argparse
import dataclasses
import logging
from typing import Optional, Sequence

from irrigsim.core.config import SimulationConfig
from irrigsim.core.environment.config import UniformNoiseConfig
from irrigsim.core.errors import ConfigurationError
from irrigsim.io.loader import load_config
from irrigsim.sim.factory import SimulatorFactory

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="irrigsim",
        description="Simulate soil moisture under a hysteresis-controlled irrigation valve.",
    )
    parser.add_argument("--config", help="YAML file with simulation parameters")
    parser.add_argument("--seed", type=int, help="Seed for the temperature noise")
    parser.add_argument("--duration", type=int, help="Override duration_hours")
    parser.add_argument("--temp-override", action="store_true",
                        help="Close the valve above the high-temperature threshold")
    parser.add_argument("--plot", metavar="PNG", help="Save the 2D time-series chart")
    parser.add_argument("--animate", action="store_true", help="Play the 3D scene animation")
    parser.add_argument("--summary", action="store_true", help="Print a run summary")
    parser.add_argument("--quiet", action="store_true", help="Disable per-step narration")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def resolve_config(args: argparse.Namespace) -> SimulationConfig:
    config = load_config(args.config) if args.config else SimulationConfig()
    overrides = {}
    if args.seed is not None:
        overrides["noise"] = UniformNoiseConfig(seed=args.seed)
    if args.duration is not None:
        overrides["duration_hours"] = args.duration
    if args.temp_override:
        overrides["temp_override_enabled"] = True
    # replace() re-runs validation
    return dataclasses.replace(config, **overrides) if overrides else config


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(message)s")

    try:
        config = resolve_config(args)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 2

    simulator = SimulatorFactory.create_simulator(config, narrate=not args.quiet)
    trajectory = simulator.run()

    if args.summary:
        summary = trajectory.summary()
        print(
            f"Steps: {summary.num_steps} | Irrigation: {summary.irrigation_hours:g} h | "
            f"Valve switches: {summary.valve_switches} | "
            f"Moisture: {summary.min_moisture:.1f}-{summary.max_moisture:.1f} % | "
            f"Mean temperature: {summary.mean_temperature:.1f} C"
        )

    if args.plot:
        from irrigsim.viz.charts import plot_trajectory

        fig = plot_trajectory(trajectory, config)
        fig.savefig(args.plot)
        logger.info("Saved chart to %s", args.plot)

    if args.animate:
        import matplotlib.pyplot as plt
        from irrigsim.viz.scene import animate_scene

        animation = animate_scene(trajectory)  # noqa: F841 # keep a reference while playing
        plt.show()

    return 0
