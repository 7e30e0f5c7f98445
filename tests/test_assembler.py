from __future__ import annotations

import random
import re

import pytest

from turno_ocr.assembler import ScheduleParser, dedupe_and_sort, nearest_time, parse_turns_from_words
from turno_ocr.settings import ParseSettings
from turno_ocr.structures import AliasMatch, ImportedTurn, TimeCandidate

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

EXPECTED = [
    ("2026-04-06", "09:00"),
    ("2026-04-07", "14:00"),
    ("2026-04-08", "16:30"),
]


def _keys(turns):
    return [t.key for t in turns]


def test_extracts_turns_for_alias(schedule_words, reference):
    turns = parse_turns_from_words(schedule_words, ["Miguel"], reference)
    assert _keys(turns) == EXPECTED


def test_monday_sixth_scenario(header_words, word, reference):
    words = header_words + [word("MIGUEL", 60, 150, w=80), word("09:00", 200, 150)]
    turns = parse_turns_from_words(words, ["MIGUEL"], reference)
    assert turns == [ImportedTurn(date="2026-04-06", start_time="09:00")]


def test_output_shape_and_order(schedule_words, reference):
    turns = parse_turns_from_words(schedule_words, ["Miguel", "Ana"], reference)
    assert turns
    for t in turns:
        assert DATE_RE.match(t.date)
        assert TIME_RE.match(t.start_time)
    assert len(set(_keys(turns))) == len(turns)
    assert _keys(turns) == sorted(_keys(turns))
    assert ("2026-04-07", "10:00") in _keys(turns)


def test_idempotent(schedule_words, reference):
    first = parse_turns_from_words(schedule_words, ["Miguel"], reference)
    second = parse_turns_from_words(schedule_words, ["Miguel"], reference)
    assert first == second


def test_shuffled_input_gives_same_result(schedule_words, reference):
    expected = parse_turns_from_words(schedule_words, ["Miguel", "Ana"], reference)
    rng = random.Random(1234)
    for _ in range(5):
        shuffled = list(schedule_words)
        rng.shuffle(shuffled)
        assert parse_turns_from_words(shuffled, ["Miguel", "Ana"], reference) == expected


def test_multi_word_alias_only_matches_its_row(schedule_words, reference):
    turns = parse_turns_from_words(schedule_words, ["MIGUEL L"], reference)
    assert _keys(turns) == [("2026-04-07", "14:00")]


def test_multi_word_alias_does_not_match_longer_name(header_words, word, reference):
    words = header_words + [word("MIGUELITO", 60, 150, w=100), word("09:00", 200, 150)]
    assert parse_turns_from_words(words, ["MIGUEL L"], reference) == []
    assert parse_turns_from_words(words, ["MIGUEL"], reference) == []


def test_time_outside_window_is_not_assigned(header_words, word, reference):
    words = header_words + [word("MIGUEL", 60, 150, w=80), word("09:00", 560, 150)]
    assert parse_turns_from_words(words, ["MIGUEL"], reference) == []


def test_time_slightly_left_of_alias_is_accepted(header_words, word, reference):
    words = header_words + [word("09:00", 370, 150), word("MIGUEL", 420, 150, w=60)]
    turns = parse_turns_from_words(words, ["MIGUEL"], reference)
    assert _keys(turns) == [("2026-04-07", "09:00")]


def test_empty_aliases(schedule_words, reference):
    assert parse_turns_from_words(schedule_words, [], reference) == []
    assert parse_turns_from_words(schedule_words, ["  ", "..."], reference) == []


def test_no_header_gives_empty_result(word, reference):
    words = [word("MIGUEL", 60, 150, w=80), word("09:00", 200, 150)]
    assert parse_turns_from_words(words, ["MIGUEL"], reference) == []


def test_empty_words(reference):
    assert parse_turns_from_words([], ["MIGUEL"], reference) == []


def test_invalid_arguments(schedule_words):
    with pytest.raises(TypeError):
        parse_turns_from_words("MIGUEL 09:00", ["MIGUEL"])
    with pytest.raises(TypeError):
        parse_turns_from_words(schedule_words, "MIGUEL")
    with pytest.raises(ValueError):
        parse_turns_from_words(schedule_words, ["MIGUEL"], strategy="optimal")


def test_heuristic_strategy_matches_for_mid_month(schedule_words, reference):
    turns = parse_turns_from_words(schedule_words, ["Miguel"], reference, strategy="heuristic")
    assert _keys(turns) == EXPECTED


def test_verified_strategy_drops_inconsistent_header(word, reference):
    # "LUNES 7" no existe alrededor de abril de 2026
    words = [
        word("LUNES", 140, 50, w=80), word("7", 200, 50, w=20),
        word("MIGUEL", 60, 150, w=80), word("09:00", 200, 150),
    ]
    assert parse_turns_from_words(words, ["MIGUEL"], reference) == []
    heuristic = parse_turns_from_words(words, ["MIGUEL"], reference, strategy="heuristic")
    assert _keys(heuristic) == [("2026-04-07", "09:00")]


def test_custom_settings_narrow_time_window(header_words, word, reference):
    words = header_words + [word("MIGUEL", 60, 150, w=80), word("09:00", 200, 150)]
    narrow = ParseSettings(time_max_dx=100)
    assert parse_turns_from_words(words, ["MIGUEL"], reference, settings=narrow) == []


def test_nearest_time_prefers_closest():
    alias = AliasMatch(x=100, y=0)
    candidates = [TimeCandidate("08:00", 450), TimeCandidate("09:00", 180), TimeCandidate("10:00", 60)]
    assert nearest_time(alias, candidates).time == "10:00"
    assert nearest_time(alias, [TimeCandidate("08:00", 30)]) is None


def test_dedupe_and_sort_keeps_first():
    turns = [
        ImportedTurn("2026-04-07", "09:00"),
        ImportedTurn("2026-04-06", "14:00"),
        ImportedTurn("2026-04-07", "09:00"),
        ImportedTurn("2026-04-06", "08:00"),
    ]
    assert _keys(dedupe_and_sort(turns)) == [
        ("2026-04-06", "08:00"),
        ("2026-04-06", "14:00"),
        ("2026-04-07", "09:00"),
    ]


def test_schedule_parser_wrapper(schedule_words, reference):
    parser = ScheduleParser(["Miguel"])
    assert _keys(parser.parse_words(schedule_words, reference)) == EXPECTED
