import logging
import os
import random
import threading
import uuid
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from .board import PREMIUMS, Board, Coord
from .errors import BoardFormatError
from .lexicon import Lexicon, load_dictionary
from .move_generator import Play, best_move
from .preview import live_words
from .scenario import (
    FailureKind,
    GenerationFailure,
    RoundOutcome,
    Scenario,
    ScenarioGenerator,
    judge_defense,
    judge_offense,
)
from .scoring import LETTER_SCORES_EN
from .validator import PlacementValidator

log = logging.getLogger(__name__)

DEFAULT_DICT = os.path.abspath(os.path.join(os.path.dirname(__file__), "../../dictionaries/en_small.txt"))
# Oldest scenarios are dropped past this many.
MAX_SCENARIOS = 200


def _play_to_dict(play: Play, board: Board) -> Dict[str, Any]:
    return {
        "word": play.word,
        "row": play.row,
        "col": play.col,
        "dir": play.direction,
        "score": play.score,
        "placed": [
            {"row": r, "col": c, "letter": ch}
            for (r, c), ch in sorted(play.new_tiles(board).items())
        ],
    }


def _outcome_to_dict(outcome: RoundOutcome, board: Board) -> Dict[str, Any]:
    return {
        "word": outcome.word,
        "score": outcome.score,
        "correct": outcome.correct,
        "value": outcome.value,
        "reference": _play_to_dict(outcome.reference, board),
        "referenceValue": outcome.reference_value,
    }


def _json_object() -> Optional[Dict[str, Any]]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def _parse_tiles(data: Dict[str, Any]) -> Dict[Coord, str]:
    tiles: Dict[Coord, str] = {}
    for t in data.get("tiles") or []:
        tiles[(int(t["row"]), int(t["col"]))] = str(t["letter"])
    return tiles


def create_app(
    dict_path: Optional[str] = None,
    seed: Optional[int] = None,
    lexicon: Optional[Lexicon] = None,
    max_scenarios: int = MAX_SCENARIOS,
) -> Flask:
    app = Flask(__name__)

    if lexicon is None:
        lexicon = load_dictionary(dict_path or DEFAULT_DICT)
    rng = random.Random(seed)
    validator = PlacementValidator(lexicon)

    # In-memory scenario store (single-process/simple)
    _lock = threading.Lock()
    _scenarios: Dict[str, Scenario] = {}
    _state: Dict[str, int] = {"generation": 0}

    def _get_scenario(sid: str) -> Tuple[Optional[Scenario], Any]:
        with _lock:
            scenario = _scenarios.get(sid)
        if scenario is None:
            return None, (jsonify({"error": f"unknown scenario: {sid}"}), 404)
        return scenario, None

    @app.get("/api/premiums")
    def premiums_api():
        return jsonify({"premiums": PREMIUMS, "letterScores": LETTER_SCORES_EN})

    @app.post("/api/scenario")
    def scenario_api():
        with _lock:
            _state["generation"] += 1
            token = _state["generation"]

        # A newer request bumps the counter; this one then stops and its result is dropped.
        def superseded() -> bool:
            with _lock:
                return _state["generation"] != token

        result = ScenarioGenerator(lexicon, random.Random(rng.random())).generate(should_cancel=superseded)
        if superseded():
            return jsonify({"error": "superseded by a newer request"}), 409
        if isinstance(result, GenerationFailure):
            status = 503 if result.kind is FailureKind.LEXICON_UNAVAILABLE else 500
            return jsonify({"error": result.message, "reason": result.kind.value}), status

        sid = str(uuid.uuid4())
        with _lock:
            _scenarios[sid] = result
            while len(_scenarios) > max_scenarios:
                del _scenarios[next(iter(_scenarios))]
        log.info("Scenario %s ready with %d plays", sid, len(result.plays))
        return jsonify({
            "id": sid,
            "boardString": result.board.to_string(),
            "consumed": sorted([r, c] for r, c in result.consumed),
            "rack": list(result.rack),
            "playCount": len(result.plays),
        })

    @app.post("/api/scenario/<sid>/validate")
    def validate_api(sid: str):
        scenario, error = _get_scenario(sid)
        if error:
            return error
        data = _json_object()
        if data is None:
            return jsonify({"error": "request body must be a JSON object"}), 400
        try:
            tiles = _parse_tiles(data)
        except (KeyError, TypeError, ValueError) as exc:
            return jsonify({"error": f"invalid tiles: {exc}"}), 400
        result = validator.validate(scenario.board, scenario.consumed, tiles)
        return jsonify(result.to_dict())

    @app.post("/api/scenario/<sid>/preview")
    def preview_api(sid: str):
        scenario, error = _get_scenario(sid)
        if error:
            return error
        data = _json_object()
        if data is None:
            return jsonify({"error": "request body must be a JSON object"}), 400
        try:
            tiles = _parse_tiles(data)
        except (KeyError, TypeError, ValueError) as exc:
            return jsonify({"error": f"invalid tiles: {exc}"}), 400
        preview = live_words(scenario.board, scenario.consumed, tiles, lexicon)
        return jsonify({
            "words": list(preview.words),
            "cells": sorted([r, c] for r, c in preview.cells),
            "score": preview.score,
        })

    @app.post("/api/scenario/<sid>/submit")
    def submit_api(sid: str):
        scenario, error = _get_scenario(sid)
        if error:
            return error
        data = _json_object()
        if data is None:
            return jsonify({"error": "request body must be a JSON object"}), 400
        round_name = data.get("round") or "offense"
        if round_name not in ("offense", "defense"):
            return jsonify({"error": "round must be offense or defense"}), 400
        try:
            tiles = _parse_tiles(data)
        except (KeyError, TypeError, ValueError) as exc:
            return jsonify({"error": f"invalid tiles: {exc}"}), 400

        result = validator.validate(scenario.board, scenario.consumed, tiles)
        if not result.valid:
            return jsonify(result.to_dict())
        if round_name == "offense":
            outcome = judge_offense(scenario, result)
        else:
            outcome = judge_defense(scenario, result)
        return jsonify({**result.to_dict(), "round": round_name, "outcome": _outcome_to_dict(outcome, scenario.board)})

    @app.post("/api/move/best")
    def api_best_move():
        data = _json_object()
        if data is None:
            return jsonify({"error": "request body must be a JSON object"}), 400
        board_string = data.get("boardString")
        rack = str(data.get("rack") or "").strip()

        if not rack:
            return jsonify({"error": "rack is required"}), 400
        if not board_string:
            return jsonify({"error": "boardString is required"}), 400
        try:
            board = Board.from_string(str(board_string))
        except BoardFormatError as exc:
            return jsonify({"error": f"invalid boardString: {exc}"}), 400
        if not lexicon.is_ready():
            return jsonify({"error": "dictionary not loaded"}), 503

        move = best_move(board, list(rack.upper()), lexicon)
        if move is None:
            return jsonify({"move": None})
        return jsonify({"move": _play_to_dict(move, board)})

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    app.run(host="127.0.0.1", port=8765, debug=True)
