import argparse
import logging
import random
from typing import Dict, Optional

from .board import Board, Coord
from .errors import BoardFormatError
from .lexicon import load_dictionary
from .move_generator import Play, best_move
from .scenario import GenerationFailure, ScenarioGenerator
from .validator import PlacementValidator


def _parse_board_string(board_string: Optional[str]) -> Board:
    if not board_string:
        return Board.empty()
    return Board.from_string(board_string)


def _parse_tiles(text: str) -> Dict[Coord, str]:
    # "7,8=A;7,9=T" -> {(7, 8): 'A', (7, 9): 'T'}
    tiles: Dict[Coord, str] = {}
    for part in text.split(";"):
        part = part.strip()
        if not part:
            continue
        pos, _, letter = part.partition("=")
        r_str, c_str = pos.split(",")
        tiles[(int(r_str), int(c_str))] = letter.strip().upper()
    return tiles


def _print_board(board: Board) -> None:
    print(board.to_string())


def _print_play(label: str, play: Play, board: Board) -> None:
    print(f"{label}: {play}")
    pretty = [f"{ch}@({r},{c})" for (r, c), ch in sorted(play.new_tiles(board).items())]
    print("  New tiles: " + ", ".join(pretty))


def _cmd_scenario(args: argparse.Namespace) -> int:
    lexicon = load_dictionary(args.dict_path)
    generator = ScenarioGenerator(lexicon, random.Random(args.seed))
    result = generator.generate()
    if isinstance(result, GenerationFailure):
        print(f"{result.message} ({result.kind.value})")
        return 1
    _print_board(result.board)
    print(f"Rack: {' '.join(result.rack)}")
    print(f"Legal plays: {len(result.plays)}")
    _print_play("Best offense", result.best_offensive, result.board)
    _print_play("Best defense", result.best_defensive, result.board)
    print(f"  Defense score: {result.best_defense_score:.1f}")
    return 0


def _cmd_best(args: argparse.Namespace) -> int:
    lexicon = load_dictionary(args.dict_path)
    board = _parse_board_string(args.board_string)
    if board.is_empty():
        print("Board is empty; place at least one word first.")
        return 1
    move = best_move(board, list(args.rack.upper()), lexicon)
    if move is None:
        print("No valid moves found.")
        return 1
    _print_play("Best", move, board)

    # Print the board with the move applied.
    after = board.copy()
    for (r, c), ch in move.new_tiles(board).items():
        after.place(r, c, ch)
    print("Board after move:")
    _print_board(after)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    lexicon = load_dictionary(args.dict_path)
    board = _parse_board_string(args.board_string)
    try:
        tiles = _parse_tiles(args.tiles)
    except ValueError:
        print("Tiles must look like ROW,COL=LETTER;ROW,COL=LETTER")
        return 2
    result = PlacementValidator(lexicon).validate(board, set(), tiles)
    if not result.valid:
        print(result.message)
        return 1
    print(f"{result.word} ({result.direction}) scores {result.score}")
    if result.cross_words:
        print("Cross-words: " + ", ".join(result.cross_words))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Scrabble single-move trainer")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    ps = sub.add_parser("scenario", help="Generate a board, a rack and the reference plays")
    ps.add_argument("--dict", required=True, type=str, dest="dict_path", help="Path to dictionary file (one word per line)")
    ps.add_argument("--seed", type=int, help="Random seed for a reproducible scenario")
    ps.set_defaults(func=_cmd_scenario)

    pb = sub.add_parser("best", help="Best scoring play for a board and rack")
    pb.add_argument("--dict", required=True, type=str, dest="dict_path", help="Path to dictionary file (one word per line)")
    pb.add_argument("--rack", required=True, type=str, help="Your rack letters")
    pb.add_argument("--board-string", type=str, help="15 lines of 15 chars; '.' empty; A-Z tiles")
    pb.set_defaults(func=_cmd_best)

    pc = sub.add_parser("check", help="Validate and score a placement")
    pc.add_argument("--dict", required=True, type=str, dest="dict_path", help="Path to dictionary file (one word per line)")
    pc.add_argument("--board-string", required=True, type=str, help="15 lines of 15 chars; '.' empty; A-Z tiles")
    pc.add_argument("--tiles", required=True, type=str, help="Placed tiles, e.g. '7,8=A;7,9=T'")
    pc.set_defaults(func=_cmd_check)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except BoardFormatError as exc:
        p.error(f"invalid --board-string: {exc}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
