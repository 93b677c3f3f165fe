from pathlib import Path

import pytest

from dense_dijkstra.main import choose_source, main


@pytest.fixture
def graph_file(tmp_path: Path) -> str:
    path = tmp_path / "graph.txt"
    path.write_text("3\n-1 1 5\n-1 -1 1\n-1 -1 -1\n")
    return str(path)


def _no_prompt(prompt):
    raise AssertionError(f"unexpected prompt: {prompt}")


def test_choose_source_given():
    assert choose_source(3, 2, _no_prompt) == 2


def test_choose_source_prompts():
    prompts = []

    def answer(prompt):
        prompts.append(prompt)
        return " 1\n"

    assert choose_source(3, None, answer) == 1
    assert prompts == ["Enter source node number [0 to 2]: "]


@pytest.mark.parametrize("answer", ["7", "-1", "abc", ""])
def test_choose_source_falls_back_to_zero(answer, capsys):
    assert choose_source(3, None, lambda _: answer) == 0
    assert "Using 0 as source node." in capsys.readouterr().err


def test_out_of_range_source_option_falls_back_to_zero(capsys):
    assert choose_source(3, 3, _no_prompt) == 0
    assert "Using 0 as source node." in capsys.readouterr().err


def test_main_prints_table(graph_file, capsys):
    assert main([graph_file, "--source", "0"], input_fn=_no_prompt) == 0
    out = capsys.readouterr().out
    assert f"Opened: {graph_file} for reading." in out
    assert "Number of nodes: 3" in out
    assert "Connectivity table read." in out
    assert "       0       2       2       1" in out


def test_main_prompts_for_source(graph_file, capsys):
    assert main([graph_file], input_fn=lambda _: "1") == 0
    out = capsys.readouterr().out
    assert "       1       0     N/A      -1 >>-->" in out
    assert "       1       2       1       1" in out


def test_main_route_to_target(graph_file, capsys):
    assert main([graph_file, "--source", "0", "--target", "2"]) == 0
    out = capsys.readouterr().out
    assert "Route 0 -> 2: 0 -> 1 -> 2" in out
    assert "Cost: 2" in out


def test_main_unreachable_target(graph_file, capsys):
    assert main([graph_file, "--source", "2", "--target", "0"]) == 0
    out = capsys.readouterr().out
    assert "Route 2 -> 0: no path" in out
    assert "Cost: N/A" in out


def test_main_bad_target(graph_file, capsys):
    assert main([graph_file, "--source", "0", "--target", "3"]) == 1
    assert "error: target 3 out of range [0, 3)" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt"), "--source", "0"]) == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_main_truncated_file_strict_and_lenient(tmp_path, capsys):
    path = tmp_path / "short.txt"
    path.write_text("2 -1 3")
    assert main([str(path), "--source", "0"]) == 1
    assert "expected 4 costs" in capsys.readouterr().err

    assert main([str(path), "--source", "0", "--lenient"]) == 0
    captured = capsys.readouterr()
    assert "[GraphReader]" in captured.err
    assert "       0       1       3       0" in captured.out


def test_main_max_nodes(tmp_path, capsys):
    path = tmp_path / "big.txt"
    path.write_text("4 " + " ".join(["-1"] * 16))
    assert main([str(path), "--source", "0", "--max-nodes", "4"]) == 1
    assert "vertex count 4" in capsys.readouterr().err
    assert main([str(path), "--source", "0", "--max-nodes", "0"]) == 0


def _closed_stdin(prompt):
    raise EOFError


def test_choose_source_end_of_input_falls_back_to_zero(capsys):
    assert choose_source(3, None, _closed_stdin) == 0
    assert "Using 0 as source node." in capsys.readouterr().err


def test_main_prompt_at_end_of_input(graph_file, capsys):
    assert main([graph_file], input_fn=_closed_stdin) == 0
    captured = capsys.readouterr()
    assert "Using 0 as source node." in captured.err
    assert "       0       2       2       1" in captured.out


def test_main_cost_out_of_range(tmp_path, capsys):
    path = tmp_path / "huge.txt"
    path.write_text("2 -1 99999999999999999999 -1 -1")
    assert main([str(path), "--source", "0"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: ")
    assert "#2" in err


def test_main_binary_file(tmp_path, capsys):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\x00\x01")
    assert main([str(path), "--source", "0"]) == 1
    assert "not a text file" in capsys.readouterr().err
