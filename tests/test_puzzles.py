import pytest

from roomcrawl.errors import ContentAlreadyTriggeredError, PuzzleStateError
from roomcrawl.models import ChestPayload, ContentItem, PuzzlePayload, Room, RoomType
from roomcrawl.puzzles import (
    RIDDLES,
    SEQUENCES,
    PuzzleReward,
    Riddle,
    RiddlePuzzle,
    RiddleState,
    Sequence,
    SequencePuzzle,
    SequenceState,
    open_puzzle,
)
from roomcrawl.puzzles.sequence import DOWN, RIGHT, UP
from roomcrawl.rng import RandomSource


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def _puzzle_room(kind="riddle"):
    room = Room(id="room_3", type=RoomType.PUZZLE, grid_x=1, grid_y=1)
    payload = PuzzlePayload(kind, "Riddle Stone", "gold", gold_reward=55, xp_reward=20)
    room.contents = [ContentItem(id="content_7", x=0.5, y=0.4, payload=payload)]
    return room


RIDDLE = Riddle("What has hands but can't clap?", ("Gloves", "Clock", "Statue"), 1)


def test_correct_riddle_solves_without_removing_content():
    room = _puzzle_room()
    item = room.contents[0]
    puzzle = RiddlePuzzle(item, RIDDLE)
    assert puzzle.question == RIDDLE.question
    assert puzzle.options == ("Gloves", "Clock", "Statue")

    reward = puzzle.answer(1)
    assert reward == PuzzleReward(gold=55, xp=20)
    assert puzzle.state is RiddleState.ANSWERED_CORRECT
    assert puzzle.solved
    assert item.triggered
    assert item.payload.solved
    assert room.contents == [item]


def test_wrong_riddle_answer_leaves_puzzle_open():
    item = _puzzle_room().contents[0]
    puzzle = RiddlePuzzle(item, RIDDLE)
    assert puzzle.answer(0) is None
    assert puzzle.state is RiddleState.ANSWERED_INCORRECT
    assert not item.triggered
    assert not item.payload.solved
    with pytest.raises(PuzzleStateError):
        puzzle.answer(1)
    # a new attempt may be opened on the same item
    assert RiddlePuzzle(item, RIDDLE).answer(1) is not None


def test_riddle_option_out_of_range():
    puzzle = RiddlePuzzle(_puzzle_room().contents[0], RIDDLE)
    with pytest.raises(ValueError):
        puzzle.answer(3)
    assert puzzle.state is RiddleState.PRESENTED


def test_abandoned_riddle_rejects_answers():
    puzzle = RiddlePuzzle(_puzzle_room().contents[0], RIDDLE)
    puzzle.abandon()
    assert puzzle.state is RiddleState.ABANDONED
    with pytest.raises(PuzzleStateError):
        puzzle.answer(1)


def test_solved_puzzle_cannot_be_reopened():
    item = _puzzle_room().contents[0]
    RiddlePuzzle(item, RIDDLE).answer(1)
    with pytest.raises(ContentAlreadyTriggeredError):
        RiddlePuzzle(item, RIDDLE)


def test_puzzle_requires_puzzle_content():
    chest = ContentItem(id="c", x=0.5, y=0.5, payload=ChestPayload("gold_small", 10))
    with pytest.raises(TypeError):
        RiddlePuzzle(chest, RIDDLE)


def test_riddle_bank_answers_are_valid():
    assert len(RIDDLES) == 5
    for riddle in RIDDLES:
        assert 0 <= riddle.answer < len(riddle.options)


def test_sequence_reveal_then_input():
    clock = FakeClock()
    item = _puzzle_room("sequence").contents[0]
    puzzle = SequencePuzzle(item, Sequence((UP, RIGHT, DOWN)), clock=clock)

    assert puzzle.state is SequenceState.SHOWING_PATTERN
    assert puzzle.pattern == (UP, RIGHT, DOWN)
    with pytest.raises(PuzzleStateError):
        puzzle.press(UP)

    clock.advance(2.5)
    assert puzzle.pattern_visible
    clock.advance(0.5)
    assert puzzle.state is SequenceState.COLLECTING_INPUT
    assert puzzle.pattern is None

    assert puzzle.press(UP) is None
    assert puzzle.press(RIGHT) is None
    assert puzzle.remaining_inputs == 1
    reward = puzzle.press(DOWN)
    assert reward == PuzzleReward(gold=55, xp=20)
    assert puzzle.state is SequenceState.EVALUATED_CORRECT
    assert item.triggered and item.payload.solved


def test_sequence_wrong_input_fails_after_full_length():
    clock = FakeClock()
    item = _puzzle_room("switch").contents[0]
    puzzle = SequencePuzzle(item, Sequence((RIGHT, UP, RIGHT, DOWN)), clock=clock)
    clock.advance(3)
    for symbol in (RIGHT, UP, RIGHT):
        assert puzzle.press(symbol) is None
    assert puzzle.state is SequenceState.COLLECTING_INPUT
    assert puzzle.press(UP) is None
    assert puzzle.state is SequenceState.EVALUATED_INCORRECT
    assert not item.triggered
    with pytest.raises(PuzzleStateError):
        puzzle.press(DOWN)


def test_sequence_rejects_unknown_symbol():
    clock = FakeClock()
    puzzle = SequencePuzzle(_puzzle_room("sequence").contents[0], SEQUENCES[0], clock=clock)
    clock.advance(5)
    with pytest.raises(ValueError):
        puzzle.press(7)
    assert puzzle.inputs == []


def test_sequence_display_names():
    assert Sequence((UP, DOWN, RIGHT)).display == "up down right"


def test_open_puzzle_picks_engine_by_kind():
    rng = RandomSource(seed=3)
    clock = FakeClock()
    assert isinstance(open_puzzle(_puzzle_room("riddle").contents[0], rng, clock), RiddlePuzzle)
    assert isinstance(open_puzzle(_puzzle_room("memory").contents[0], rng, clock), RiddlePuzzle)
    assert isinstance(open_puzzle(_puzzle_room("sequence").contents[0], rng, clock), SequencePuzzle)
    assert isinstance(open_puzzle(_puzzle_room("switch").contents[0], rng, clock), SequencePuzzle)


def test_unknown_kind_opens_sequence_lock():
    assert isinstance(open_puzzle(_puzzle_room("pressure_plate").contents[0], RandomSource(seed=1)), SequencePuzzle)


def test_on_evaluated_reports_each_attempt():
    seen = []
    item = _puzzle_room().contents[0]
    RiddlePuzzle(item, RIDDLE, on_evaluated=seen.append).answer(2)
    puzzle = RiddlePuzzle(item, RIDDLE, on_evaluated=seen.append)
    puzzle.answer(1)
    assert len(seen) == 2
    assert seen[-1] is puzzle
    assert seen[-1].solved
