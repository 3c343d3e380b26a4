import enum
import logging
import random
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional, Tuple, Union

from .board import Board, Coord
from .board_builder import BoardBuilder, BuilderConfig, BuiltBoard
from .defense import DEFAULT_WEIGHTS, DefenseWeights, defense_score, defense_score_for
from .errors import LexiconUnavailable
from .lexicon import Lexicon
from .move_generator import MoveEnumerator, Play, rank_key
from .validator import ValidationResult

log = logging.getLogger(__name__)

# Racks lean toward letters that combine easily.
COMMON_LETTERS = "AEIOUNRSTLCDGHM"
RARE_LETTERS = "PBFYWVKJXQZ"
COMMON_PROBABILITY = 0.75


@dataclass(frozen=True)
class GeneratorConfig:
    scenario_attempts: int = 40
    board_attempts: int = 20
    min_plays: int = 4
    rack_size: int = 7


class FailureKind(enum.Enum):
    LEXICON_UNAVAILABLE = "lexicon_unavailable"
    NO_BOARD = "no_board"
    TOO_FEW_PLAYS = "too_few_plays"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class GenerationFailure:
    kind: FailureKind
    message: str = "Could not generate a scenario, try again."


@dataclass(frozen=True)
class Scenario:
    board: Board
    consumed: FrozenSet[Coord]
    rack: Tuple[str, ...]
    best_offensive: Play
    best_defensive: Play
    best_defense_score: float
    plays: Tuple[Play, ...]


def sample_rack(rng: random.Random, size: int = 7) -> List[str]:
    rack = []
    for _ in range(size):
        pool = COMMON_LETTERS if rng.random() < COMMON_PROBABILITY else RARE_LETTERS
        rack.append(rng.choice(pool))
    return rack


def pick_best_offensive(plays: List[Play]) -> Play:
    return min(plays, key=lambda p: rank_key(p, p.score))


def pick_best_defensive(
    plays: List[Play], board: Board, weights: DefenseWeights = DEFAULT_WEIGHTS
) -> Tuple[Play, float]:
    scored = [(p, defense_score(p, board, weights)) for p in plays]
    best, value = min(scored, key=lambda pv: rank_key(pv[0], pv[1]))
    return best, value


class ScenarioGenerator:
    """Builds a board, samples a rack and finds the reference plays for it."""

    def __init__(
        self,
        lexicon: Lexicon,
        rng: Optional[random.Random] = None,
        config: GeneratorConfig = GeneratorConfig(),
        builder_config: BuilderConfig = BuilderConfig(),
        weights: DefenseWeights = DEFAULT_WEIGHTS,
    ):
        self.lexicon = lexicon
        self.rng = rng or random.Random()
        self.config = config
        self.weights = weights
        self.builder = BoardBuilder(lexicon, self.rng, builder_config)
        self.enumerator = MoveEnumerator(lexicon)

    def generate(
        self, should_cancel: Optional[Callable[[], bool]] = None
    ) -> Union[Scenario, GenerationFailure]:
        """Run up to `scenario_attempts` attempts; budget exhaustion is a failure value.

        `should_cancel` is polled before every attempt. Once it returns True
        the run stops and reports CANCELLED.
        """
        if not self.lexicon.is_ready():
            return GenerationFailure(FailureKind.LEXICON_UNAVAILABLE, "The dictionary is not loaded yet.")

        last = FailureKind.NO_BOARD
        for attempt in range(1, self.config.scenario_attempts + 1):
            if should_cancel is not None and should_cancel():
                log.info("Scenario generation cancelled after %d attempts", attempt - 1)
                return GenerationFailure(FailureKind.CANCELLED, "Generation was superseded.")
            try:
                result = self.generate_once(should_cancel)
            except LexiconUnavailable:
                return GenerationFailure(FailureKind.LEXICON_UNAVAILABLE, "The dictionary is not loaded yet.")
            if isinstance(result, Scenario):
                log.info(
                    "Generated scenario on attempt %d: %d tiles, %d plays",
                    attempt, result.board.count_tiles(), len(result.plays),
                )
                return result
            if result.kind is FailureKind.CANCELLED:
                return result
            last = result.kind
        return GenerationFailure(last)

    def generate_once(
        self, should_cancel: Optional[Callable[[], bool]] = None
    ) -> Union[Scenario, GenerationFailure]:
        built = self._build_board(should_cancel)
        if isinstance(built, GenerationFailure):
            return built

        rack = sample_rack(self.rng, self.config.rack_size)
        plays = self.enumerator.enumerate(built.board, rack, built.consumed)
        if len(plays) < self.config.min_plays:
            log.debug("Rack %s has only %d plays", "".join(rack), len(plays))
            return GenerationFailure(FailureKind.TOO_FEW_PLAYS)

        offensive = pick_best_offensive(plays)
        defensive, defense_value = pick_best_defensive(plays, built.board, self.weights)
        return Scenario(
            board=built.board,
            consumed=frozenset(built.consumed),
            rack=tuple(rack),
            best_offensive=offensive,
            best_defensive=defensive,
            best_defense_score=defense_value,
            plays=tuple(plays),
        )

    def _build_board(
        self, should_cancel: Optional[Callable[[], bool]]
    ) -> Union[BuiltBoard, GenerationFailure]:
        for _ in range(self.config.board_attempts):
            if should_cancel is not None and should_cancel():
                return GenerationFailure(FailureKind.CANCELLED, "Generation was superseded.")
            built = self.builder.build()
            if built is not None:
                return built
        return GenerationFailure(FailureKind.NO_BOARD)


@dataclass(frozen=True)
class RoundOutcome:
    word: str
    score: int
    correct: bool
    # Score (offense) or defense value (defense) of the submitted play.
    value: float
    reference: Play
    reference_value: float


def judge_offense(scenario: Scenario, result: ValidationResult) -> RoundOutcome:
    """Any valid play that reaches the best score counts; plays can tie."""
    best = scenario.best_offensive
    return RoundOutcome(
        word=result.word,
        score=result.score,
        correct=result.valid and result.score >= best.score,
        value=float(result.score),
        reference=best,
        reference_value=float(best.score),
    )


def judge_defense(
    scenario: Scenario, result: ValidationResult, weights: DefenseWeights = DEFAULT_WEIGHTS
) -> RoundOutcome:
    value = defense_score_for(result.word, result.positions, scenario.board, weights)
    return RoundOutcome(
        word=result.word,
        score=result.score,
        correct=result.valid and value >= scenario.best_defense_score,
        value=value,
        reference=scenario.best_defensive,
        reference_value=scenario.best_defense_score,
    )
