import argparse
import logging
import os
import sys
import time

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from driver_sim import DriverEnv  # noqa: E402
from driver_sim.config import load_config  # noqa: E402
from driver_sim.controls import FrameClock, snapshot_from_keys  # noqa: E402

logger = logging.getLogger("driver_sim")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play the endless driver")
    parser.add_argument("--config", type=str, default="", help="Path to config YAML file")
    parser.add_argument("--assets", type=str, default=None, help="Directory with <name>.png images")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--fps", type=int, default=None)
    parser.add_argument("--log-level", type=str, default="INFO")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )

    config = load_config(args.config)
    if args.fps is not None:
        config.fps = args.fps

    env = DriverEnv(config=config, render_mode="human", seed=args.seed, asset_dir=args.assets)
    env.reset(seed=args.seed)

    try:
        import pygame
    except ImportError as exc:
        raise RuntimeError("pygame is required to run the human demo") from exc
    env.render()
    logger.debug("Config: %s", config.to_dict())
    logger.info("Starting at %dx%d, %d fps", config.width, config.height, config.fps)

    clock = FrameClock(max_dt=0.25)
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

        snapshot = snapshot_from_keys(pygame.key.get_pressed(), pygame)
        env.update(clock.tick(time.perf_counter()), snapshot)
        env.render()

    logger.info("Final score %d after %.1fs", env.session.score, env.session.elapsed_time)
    env.close()


if __name__ == "__main__":
    main()
