"""Tests for command parsing and the input reader."""
import io

import pytest

from commands import COMMAND_REFERENCE, InputReader, parse_command, parse_duration_override
from pomodoro import TimerContext
from schemas import MAX_OVERRIDE_SECONDS, Command, CommandKind


class TestParseDurationOverride:

    def test_minutes_and_seconds(self):
        assert parse_duration_override("restart 5:30") == 330

    def test_zero_minutes(self):
        assert parse_duration_override("restart 0:10") == 10

    def test_minutes_past_an_hour(self):
        assert parse_duration_override("restart 90:00") == 5400

    def test_any_separator_between_groups(self):
        assert parse_duration_override("restart 2 15") == 135

    def test_extra_groups_are_ignored(self):
        assert parse_duration_override("restart 1:02:03") == 62

    def test_longest_allowed_override(self):
        assert parse_duration_override("restart 1440:00") == MAX_OVERRIDE_SECONDS

    @pytest.mark.parametrize("text", ["restart 1440:01", "restart 200000000:00", "restart 0:99999999999"])
    def test_out_of_range_falls_back_to_default(self, text):
        assert parse_duration_override(text) is None
        assert parse_command(text).kind is CommandKind.RESTART

    @pytest.mark.parametrize("text", ["restart", "restart 5", "restart abc", "restart :30"])
    def test_fewer_than_two_groups(self, text):
        assert parse_duration_override(text) is None


class TestParseCommand:

    @pytest.mark.parametrize("line, kind", [
        ("pause", CommandKind.PAUSE),
        ("next", CommandKind.NEXT),
        ("quit", CommandKind.QUIT),
        ("help", CommandKind.HELP),
        ("restart", CommandKind.RESTART),
    ])
    def test_command_words(self, line, kind):
        assert parse_command(line + "\n").kind is kind

    def test_surrounding_whitespace_is_trimmed(self):
        command = parse_command("  next \n")
        assert command.kind is CommandKind.NEXT
        assert command.text == "next"

    def test_exact_words_only(self):
        """'pause now' is not a pause command."""
        assert parse_command("pause now").kind is CommandKind.UNRECOGNIZED
        assert parse_command("Quit").kind is CommandKind.UNRECOGNIZED

    def test_restart_may_carry_arguments(self):
        command = parse_command("restart 5:30")
        assert command.kind is CommandKind.RESTART
        assert command.override_seconds == 330

    def test_restart_without_time_uses_default(self):
        assert parse_command("restart").override_seconds is None
        assert parse_command("restart 7").override_seconds is None

    def test_empty_line_is_unrecognized(self):
        assert parse_command("\n").kind is CommandKind.UNRECOGNIZED

    def test_interrupting_kinds(self):
        assert parse_command("pause").interrupts
        assert parse_command("next").interrupts
        assert parse_command("restart").interrupts
        assert parse_command("quit").interrupts
        assert not parse_command("help").interrupts
        assert not parse_command("hello").interrupts


class TestCommandModel:

    def test_defaults(self):
        command = Command()
        assert command.kind is CommandKind.UNRECOGNIZED
        assert command.override_seconds is None

    def test_negative_override_rejected(self):
        with pytest.raises(ValueError):
            Command(kind=CommandKind.RESTART, override_seconds=-1)

    def test_oversized_override_rejected(self):
        with pytest.raises(ValueError):
            Command(kind=CommandKind.RESTART, override_seconds=MAX_OVERRIDE_SECONDS + 1)


class RecordingAcknowledgment:
    prompt = "press enter to resume"

    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class TestInputReader:

    def make_reader(self, text, awaiting_ack=False):
        context = TimerContext(acknowledgment=RecordingAcknowledgment())
        context.awaiting_ack = awaiting_ack
        return InputReader(context, io.StringIO(text)), context

    def test_interrupting_command_raises_signal(self):
        reader, context = self.make_reader("next\nquit\n")
        reader.run()
        assert context.command.kind is CommandKind.QUIT
        assert context.wake.is_set()

    def test_unrecognized_line_submitted_while_awaiting_ack(self):
        reader, context = self.make_reader("anything\n", awaiting_ack=True)
        submitted = []
        context.submit = submitted.append
        reader.run()
        assert submitted[0].kind is CommandKind.UNRECOGNIZED
        assert submitted[0].text == "anything"

    def test_unrecognized_line_not_submitted_when_idle(self):
        reader, context = self.make_reader("anything\n")
        submitted = []
        context.submit = submitted.append
        reader.run()
        # Only the end-of-input quit is submitted
        assert [c.kind for c in submitted] == [CommandKind.QUIT]

    def test_help_prints_reference_without_signal(self, capsys):
        reader, context = self.make_reader("help\n")
        submitted = []
        context.submit = submitted.append
        reader.run()
        assert COMMAND_REFERENCE.strip() in capsys.readouterr().out
        assert CommandKind.HELP not in [c.kind for c in submitted]

    def test_quit_stops_reading(self):
        reader, context = self.make_reader("quit\nnext\n")
        submitted = []
        context.submit = submitted.append
        reader.run()
        assert [c.kind for c in submitted] == [CommandKind.QUIT]
        assert reader.stream.readline() == "next\n"

    def test_quit_cancels_acknowledgment(self):
        reader, context = self.make_reader("quit\n")
        reader.run()
        assert context.acknowledgment.cancelled

    def test_end_of_input_counts_as_quit(self):
        reader, context = self.make_reader("")
        reader.run()
        assert context.command.kind is CommandKind.QUIT
        assert context.acknowledgment.cancelled

    def test_each_command_submitted_in_order(self):
        reader, context = self.make_reader("next\nrestart 1:00\npause\nquit\n")
        submitted = []
        context.submit = submitted.append
        reader.run()
        assert [c.kind for c in submitted] == [
            CommandKind.NEXT,
            CommandKind.RESTART,
            CommandKind.PAUSE,
            CommandKind.QUIT,
        ]
        assert submitted[1].override_seconds == 60
