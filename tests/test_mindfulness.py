"""Tests for the mindfulness timer."""

from __future__ import annotations

import random
from datetime import datetime

import pytest

import mindfulness
from mindfulness import Activity, LogEntry


def _question_lines(out: str) -> list[str]:
    return [line for line in out.splitlines() if line.startswith("> ")]


class TestTimers:
    def test_spinner_takes_its_time(self, clock):
        mindfulness.spinner(3)
        assert clock.now == pytest.approx(3.0)

    def test_countdown_ticks_down(self, clock, capsys):
        mindfulness.countdown(3)
        out = capsys.readouterr().out
        assert clock.now == 3
        assert out.index("3") < out.index("2") < out.index("1")

    def test_zero_countdown_is_instant(self, clock):
        mindfulness.countdown(0)
        assert clock.now == 0


class TestBreathing:
    def test_alternates_until_deadline(self, clock, capsys):
        mindfulness.breathe(10, random.Random(0))
        out = capsys.readouterr().out
        assert out.count("Breathe in...") == 1
        assert out.count("Breathe out...") == 1
        # 4s in, 1s rest, 5s out (clamped), 1s rest
        assert clock.now == pytest.approx(11.0)

    def test_zero_seconds_does_nothing(self, clock, capsys):
        mindfulness.breathe(0, random.Random(0))
        assert "Breathe in" not in capsys.readouterr().out

    def test_short_session_still_breathes_once(self, clock, capsys):
        mindfulness.breathe(1, random.Random(0))
        out = capsys.readouterr().out
        assert out.count("Breathe in...") == 1
        assert "Breathe out" not in out


class TestReflection:
    def test_asks_questions_until_deadline(self, clock, feed, capsys):
        feed([""])
        mindfulness.reflect(12, random.Random(3))
        out = capsys.readouterr().out
        questions = _question_lines(out)
        assert len(questions) == 2
        assert all(q[2:] in mindfulness.REFLECTION_QUESTIONS for q in questions)
        assert any(p in out for p in mindfulness.REFLECTION_PROMPTS)


class TestListing:
    def test_collects_entries_until_deadline(self, clock, monkeypatch, capsys):
        answers = iter(["mom", "   ", " dad ", "never read"])

        def slow_input(prompt: str = "") -> str:
            clock.sleep(4)
            return next(answers)

        monkeypatch.setattr("builtins.input", slow_input)
        mindfulness.list_items(10, random.Random(1))
        out = capsys.readouterr().out

        assert "You listed 2 item(s). Nice work!" in out
        assert "1. mom" in out
        assert "2. dad" in out
        assert "never read" not in out

    def test_entry_in_progress_past_deadline_is_kept(
        self, clock, monkeypatch, capsys
    ):
        def very_slow_input(prompt: str = "") -> str:
            clock.sleep(60)
            return "late but counted"

        monkeypatch.setattr("builtins.input", very_slow_input)
        mindfulness.list_items(5, random.Random(1))
        assert "1. late but counted" in capsys.readouterr().out


class TestDuration:
    def test_reprompts_until_valid(self, feed, capsys):
        feed(["soon", "-4", "2.5", " 12 "])
        assert mindfulness.ask_duration() == 12
        assert capsys.readouterr().out.count("Invalid.") == 3

    def test_zero_is_allowed(self, feed):
        feed(["0"])
        assert mindfulness.ask_duration() == 0


class TestLog:
    def test_line_format(self):
        entry = LogEntry(datetime(2024, 5, 1, 8, 30, 0), "Breathing Activity", 30)
        expected = "2024-05-01 08:30:00 - Breathing Activity - 30 seconds"
        assert entry.to_line() == expected

    def test_reads_back_newest_first(self, tmp_path):
        path = tmp_path / "activity_log.txt"
        assert mindfulness.append_log(path, LogEntry(datetime(2024, 1, 1), "A", 1))
        assert mindfulness.append_log(path, LogEntry(datetime(2024, 1, 2), "B", 2))
        lines = mindfulness.read_log(path)
        assert lines == [
            "2024-01-02 00:00:00 - B - 2 seconds",
            "2024-01-01 00:00:00 - A - 1 seconds",
        ]

    def test_missing_log_is_empty(self, tmp_path):
        assert mindfulness.read_log(tmp_path / "nope.txt") == []

    def test_unwritable_log_is_ignored(self, tmp_path):
        entry = LogEntry(datetime(2024, 1, 1), "A", 1)
        assert mindfulness.append_log(tmp_path, entry) is False

    def test_show_log_reports_unreadable_file(self, tmp_path, feed, capsys):
        feed([""])
        mindfulness.show_log(tmp_path)
        assert "Unable to read log file." in capsys.readouterr().out

    def test_show_log_empty(self, tmp_path, feed, capsys):
        feed([""])
        mindfulness.show_log(tmp_path / "activity_log.txt")
        assert "(No log entries yet.)" in capsys.readouterr().out

    def test_path_resolution(self, monkeypatch, tmp_path):
        monkeypatch.delenv("MINDFULNESS_LOG_FILE", raising=False)
        assert mindfulness._log_path() == mindfulness._DEFAULT_LOG_PATH

        monkeypatch.setenv("MINDFULNESS_LOG_FILE", str(tmp_path / "env.txt"))
        assert mindfulness._log_path() == tmp_path / "env.txt"
        flag = str(tmp_path / "flag.txt")
        assert mindfulness._log_path(flag) == tmp_path / "flag.txt"


class TestDriver:
    def test_runs_body_and_logs(self, clock, feed, tmp_path, capsys):
        calls: list[int] = []
        stub = Activity("Stub Activity", "Just a stub.", lambda s, rng: calls.append(s))
        log_path = tmp_path / "log.txt"
        feed(["abc", "7"])

        entry = mindfulness.run_activity(stub, rng=random.Random(0), log_path=log_path)

        out = capsys.readouterr().out
        assert calls == [7]
        assert entry.seconds == 7
        assert "=== Stub Activity ===" in out
        assert "Invalid." in out
        assert "You have completed the Stub Activity for 7 seconds." in out
        assert log_path.read_text().strip().endswith(" - Stub Activity - 7 seconds")

    def test_log_failure_does_not_abort(self, clock, feed, tmp_path):
        stub = Activity("Stub", "", lambda s, rng: None)
        feed(["1"])
        entry = mindfulness.run_activity(stub, rng=random.Random(0), log_path=tmp_path)
        assert entry.name == "Stub"


class TestMenu:
    def test_invalid_view_and_quit(self, clock, feed, tmp_path, capsys):
        feed(["9", "", "4", "", "0"])
        mindfulness.run_menu(rng=random.Random(0), log_path=tmp_path / "log.txt")
        out = capsys.readouterr().out
        assert "Invalid option. Press Enter to continue..." in out
        assert "(No log entries yet.)" in out
        assert "Goodbye. Take care!" in out

    def test_breathing_from_menu_is_logged(self, clock, feed, tmp_path, capsys):
        log_path = tmp_path / "log.txt"
        feed(["1", "4", "4", "", "0"])
        mindfulness.run_menu(rng=random.Random(0), log_path=log_path)
        out = capsys.readouterr().out
        assert "Breathing Activity - 4 seconds" in out
        assert len(mindfulness.read_log(log_path)) == 1

    def test_undecodable_log_does_not_end_the_menu(
        self, clock, feed, tmp_path, capsys
    ):
        log_path = tmp_path / "log.txt"
        log_path.write_bytes(b"2024-01-01 00:00:00 - Caf\xe9 - 5 seconds\n")
        feed(["4", "", "0"])
        mindfulness.run_menu(rng=random.Random(0), log_path=log_path)
        out = capsys.readouterr().out
        assert "Unable to read log file." in out
        assert "Goodbye. Take care!" in out

    def test_main_exits_quietly_on_eof(self, clock, feed, tmp_path):
        feed([])
        assert mindfulness.main(["--log-file", str(tmp_path / "log.txt")]) == 0
