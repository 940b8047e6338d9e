"""Shared test fixtures for the linoise test suite."""

import io

import pytest

from linoise.question import Question


class ScriptedReader:
    """LineReader replaying canned answers.

    Each item is either a line to return or an exception to raise; once
    the script runs out it raises EOFError. Prompts are recorded in
    ``prompts``. With a history, non-blank lines are added to it the way
    prompt_toolkit appends accepted input.
    """

    def __init__(self, *answers, history=None):
        self.answers = list(answers)
        self.history = history
        self.prompts = []
        self.restored = False

    def read(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        if self.history is not None and answer.strip():
            self.history.add(answer)
        return answer

    def restore(self):
        self.restored = True


@pytest.fixture
def scripted_reader():
    return ScriptedReader


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def ask(output):
    """Build a Question that answers with the given lines."""

    def _make(*answers, config=None):
        reader = ScriptedReader(*answers)
        return Question(config, reader=reader, output=output), reader

    return _make
