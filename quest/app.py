# quest/app.py
from __future__ import annotations

import argparse
import sys
import pygame

from quest import debug_logger
from quest.scene.exploration_scene import ExplorationScene, SceneConfig
from quest.scenes.registry import all_scene_ids


def _parse_size(s: str) -> tuple[int, int]:
    try:
        a, b = s.lower().replace("x", " ").split()
        return int(a), int(b)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WxH (e.g. 1024x768), got: {s!r}")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Crystal Quest (dev harness)")
    p.add_argument("--scene", default="village", choices=all_scene_ids(), help="Scene preset id")
    p.add_argument("--window", default="1024x768", type=_parse_size, help="Window size WxH")
    p.add_argument("--assets", default="assets", help="Asset root directory")
    p.add_argument("--fps", default=60, type=int, help="Frame cap")
    p.add_argument(
        "--debug",
        nargs="*",
        default=None,
        metavar="CAT",
        help=f"Debug categories to print (any of: {', '.join(sorted(debug_logger.ALL_CATEGORIES))})",
    )
    p.add_argument("--quiet", action="store_true", help="Disable debug output")
    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    args = build_arg_parser().parse_args(argv)

    if args.quiet:
        debug_logger.DEBUG_ENABLED = False
    elif args.debug is not None:
        debug_logger.set_categories(args.debug or debug_logger.ALL_CATEGORIES)

    cfg = SceneConfig(
        scene_id=args.scene,
        window_size=args.window,
        asset_root=args.assets,
        fps=args.fps,
    )

    scene: ExplorationScene | None = None
    pygame.init()
    try:
        screen = pygame.display.set_mode(cfg.window_size)
        pygame.display.set_caption(f"Crystal Quest - {cfg.scene_id}")

        try:
            scene = ExplorationScene(cfg)
        except (pygame.error, FileNotFoundError) as e:
            print(f"[DEV] Could not load scene {cfg.scene_id!r} from {cfg.asset_root!r}: {e}")
            return 1

        scene.listen(
            "inventory.changed",
            lambda _topic, data: print(f"[DEV] inventory: {list(data['items'])}"),
        )

        clock = pygame.time.Clock()
        running = True

        print("[DEV] Controls:")
        print("  Arrows/WASD  Move")
        print("  SPACE        Talk / pick up")
        print("  ESC          Quit")

        while running:
            dt = clock.tick(cfg.fps) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                else:
                    scene.handle_event(event)

            scene.update(dt)

            scene.draw(screen)
            pygame.display.flip()

    finally:
        if scene is not None:
            scene.teardown()
        pygame.quit()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
