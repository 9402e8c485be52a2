import argparse

from tile_merge.config.game_config import GameConfig
from tile_merge.env.game_engine import GameEngine
from tile_merge.interface.console import ConsoleActuator
from tile_merge.interface.input import InputManager
from tile_merge.utils.storage import FileStorage, MemoryStorage


def run_session(engine: GameEngine, input_manager: InputManager) -> None:
    """Read commands from stdin until ``q`` or end of input."""
    engine.bind(input_manager)
    while True:
        try:
            command = input("move (w/a/s/d, h/j/k/l, r=restart, c=continue, q=quit): ")
        except EOFError:
            break
        command = command.strip().lower()
        if command in ("q", "quit"):
            break
        if not input_manager.handle_key(command):
            print(f"[main] unknown command {command!r}")
        elif engine.is_terminated() and command not in ("r", "c"):
            print("[main] game finished; press r to restart")
    print(f"[main] final score={engine.score}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Play the 2048 sliding tile puzzle")
    parser.add_argument("--size", type=int, default=4, help="Board width and height")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--win-value",
        type=int,
        default=2048,
        help="Tile value that wins the game",
    )
    parser.add_argument(
        "--state-dir",
        type=str,
        default=None,
        help="Directory or gs:// prefix for the saved game (default: keep in memory)",
    )
    args = parser.parse_args()

    config = GameConfig(size=args.size, win_value=args.win_value)
    if args.state_dir:
        print(f"[main] saving games under {args.state_dir}")
        storage = FileStorage(args.state_dir)
    else:
        storage = MemoryStorage()
    engine = GameEngine(storage, ConsoleActuator(), config=config, seed=args.seed)
    run_session(engine, InputManager())


if __name__ == "__main__":
    main()
