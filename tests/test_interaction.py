import io

import numpy as np
import pytest

from tsp_held_karp.interaction import format_matrix, format_report, format_route, main, read_instance, read_start
from tsp_held_karp.solvers.held_karp import TourSolution


class ScriptedInput:
    def __init__(self, answers):
        self.answers = iter(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        return next(self.answers)


def test_read_instance_reprompts_malformed_answers():
    input_fn = ScriptedInput(["abc", "0", "2", "0", "x", "3", "-1", "4", "0", "5", "2"])
    messages = []

    matrix, start = read_instance(input_fn, messages.append)

    assert matrix == [[0.0, 3.0], [4.0, 0.0]]
    assert start == 2
    assert "Enter time for [1][2]: " in input_fn.prompts
    assert "Enter the starting location (1 to 2): " in input_fn.prompts
    assert sum(m.startswith("Invalid value") for m in messages) == 5


def test_read_instance_accepts_unreachable():
    input_fn = ScriptedInput(["2", "0", "inf", "1", "0", "1"])
    matrix, _ = read_instance(input_fn, lambda *args: None)
    assert np.isinf(matrix[0][1])


def test_read_instance_rejects_nan():
    input_fn = ScriptedInput(["1", "nan", "0", "1"])
    messages = []
    matrix, _ = read_instance(input_fn, messages.append)
    assert matrix == [[0.0]]
    assert any("NaN" in m for m in messages)


def test_read_instance_with_start():
    input_fn = ScriptedInput(["1", "0"])
    matrix, start = read_instance(input_fn, lambda *args: None, start=1)
    assert (matrix, start) == ([[0.0]], 1)
    assert len(input_fn.prompts) == 2


def test_read_start():
    assert read_start(3, ScriptedInput(["4", "3"]), lambda *args: None) == 3


def test_format_route():
    assert format_route([1, 2, 4, 3, 1]) == "1 -> 2 -> 4 -> 3 -> 1"


def test_format_matrix(textbook_matrix):
    lines = format_matrix(textbook_matrix).splitlines()
    assert len(lines) == 5
    assert lines[0].split() == ["1", "2", "3", "4"]
    assert lines[2].split() == ["2", "5.00", "0.00", "9.00", "10.00"]


def test_format_report(textbook_matrix):
    report = format_report(textbook_matrix, TourSolution(35.0, [1, 2, 4, 3, 1]))
    lines = report.splitlines()

    assert lines[0] == "=" * 50
    assert "Route: 1 -> 2 -> 4 -> 3 -> 1" in lines
    assert [line for line in lines if line.startswith("Location ")] == [
        "Location 1", "Location 2", "Location 4", "Location 3", "Location 1",
    ]
    assert "Minimum distance: 35.00 units" in lines


@pytest.fixture
def matrix_file(tmp_path, textbook_matrix):
    path = tmp_path / "matrix.txt"
    np.savetxt(path, np.array(textbook_matrix, dtype=float))
    return path


def test_main_with_matrix_file(matrix_file, capsys):
    assert main(["--matrix", str(matrix_file), "--start", "1"]) == 0
    out = capsys.readouterr().out
    assert "Route: 1 -> 2 -> 4 -> 3 -> 1" in out
    assert "Minimum distance: 35.00 units" in out


def test_main_prompts_for_everything(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("2\n0\n3\n4\n0\n1\n"))
    assert main([]) == 0
    assert "Minimum distance: 7.00 units" in capsys.readouterr().out


def test_main_invalid_matrix(tmp_path, caplog):
    path = tmp_path / "matrix.txt"
    path.write_text("0 -1\n1 0\n")
    assert main(["--matrix", str(path), "--start", "1"]) == 1
    assert "negative" in caplog.text


def test_main_no_tour(tmp_path, caplog):
    path = tmp_path / "matrix.txt"
    path.write_text("0 1 1\ninf 0 1\ninf 1 0\n")
    assert main(["--matrix", str(path), "--start", "1"]) == 1
    assert "returns to location 1" in caplog.text


def test_main_plot(matrix_file, tmp_path):
    plot_path = tmp_path / "tour.png"
    assert main(["--matrix", str(matrix_file), "--start", "2", "--plot", str(plot_path)]) == 0
    assert plot_path.exists()


def test_main_empty_matrix_file(tmp_path, monkeypatch, caplog):
    path = tmp_path / "matrix.txt"
    path.write_text("")
    stdin = io.StringIO("1\n1\n1\n")
    monkeypatch.setattr("sys.stdin", stdin)

    assert main(["--matrix", str(path)]) == 1
    assert stdin.read() == "1\n1\n1\n"
    assert "Can't solve the instance" in caplog.text


def test_main_input_ends_early(monkeypatch, caplog):
    monkeypatch.setattr("sys.stdin", io.StringIO("2\n0\n"))
    assert main([]) == 1
    assert "Input ended before the instance was complete" in caplog.text
