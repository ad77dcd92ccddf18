# tests/test_cli.py
# end to end through the command line on a real LMDB file

import pytest

from uonum.cli import cli


@pytest.fixture
def run(tmp_path, monkeypatch, tokenizer):
    monkeypatch.setattr(cli, "SpacyTokenizer", lambda model: tokenizer)
    db = str(tmp_path / "uonum.db")
    cfg = str(tmp_path / "uonum.json")

    def _run(*args):
        return cli.main(["--db", db, "--config", cfg, *args])
    return _run


@pytest.fixture
def corpus(tmp_path):
    p = tmp_path / "corpus.txt"
    p.write_text("犬|が|走る|。\n犬|が|鳴く|。\n\n猫\n", encoding="utf8")
    return str(p)


def test_register_then_dump(run, corpus, capsys):
    assert run("register", corpus) == 0
    capsys.readouterr()

    assert run("dump") == 0
    out = capsys.readouterr().out
    assert "犬_名詞\n  が_助詞 : 2\n\n" in out
    assert "が_助詞\n  走る_動詞 : 1\n  鳴く_動詞 : 1\n\n" in out


def test_register_from_stdin(run, monkeypatch, capsys):
    import io

    monkeypatch.setattr("sys.stdin", io.StringIO("犬|が|走る|。\n"))
    assert run("register") == 0
    assert run("generate", "犬") == 0
    assert capsys.readouterr().out.strip() == "犬が走る。"


def test_generate_with_class_and_seed(run, corpus, capsys):
    run("register", corpus)
    capsys.readouterr()

    assert run("generate", "犬", "--class", "名詞", "--seed", "5") == 0
    first = capsys.readouterr().out.strip()
    assert first in ("犬が走る。", "犬が鳴く。")

    run("generate", "犬", "--seed", "5")
    assert capsys.readouterr().out.strip() == first


def test_generate_unknown_word_prints_empty_line(run, corpus, capsys):
    run("register", corpus)
    capsys.readouterr()
    assert run("generate", "馬") == 0
    assert capsys.readouterr().out.strip() == ""


def test_generate_max_steps(run, corpus, capsys):
    run("register", corpus)
    capsys.readouterr()
    assert run("generate", "犬", "--max-steps", "2") == 0
    assert capsys.readouterr().out.strip() == "犬が"


def test_texts_lists_only_registered_lines(run, corpus, capsys):
    run("register", corpus)
    capsys.readouterr()
    assert run("texts") == 0
    out = capsys.readouterr().out
    assert "犬|が|走る|。" in out
    assert "犬|が|鳴く|。" in out
    # single-token and empty lines never reach the log
    assert "猫" not in out


def test_missing_input_file(run, tmp_path, capsys):
    assert run("register", str(tmp_path / "nope.txt")) == 1
    assert "Could not open the input file" in capsys.readouterr().err


def test_bad_config_file(tmp_path, capsys):
    cfg = tmp_path / "bad.json"
    cfg.write_text("{", encoding="utf8")
    assert cli.main(["--db", str(tmp_path / "x.db"), "--config", str(cfg), "dump"]) == 1
    assert "Could not read config" in capsys.readouterr().err


def test_generate_prompt_reaches_terminal(run, monkeypatch, capsys):
    import io

    monkeypatch.setattr("sys.stdin", io.StringIO("犬|が|走る|。\n"))
    run("register")
    capsys.readouterr()

    # blank answer is asked again
    monkeypatch.setattr("sys.stdin", io.StringIO("\n犬\n"))
    assert run("generate") == 0
    out = capsys.readouterr().out
    assert out.count("Trigger word") == 2
    assert out.strip().endswith("犬が走る。")


def test_generate_prompt_at_eof_fails(run, monkeypatch, capsys):
    import io

    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert run("generate") == 1
    assert "Could not read trigger word." in capsys.readouterr().err


def test_failure_is_logged_at_error(run, tmp_path, caplog):
    assert run("register", str(tmp_path / "nope.txt")) == 1
    errors = [r for r in caplog.records if r.levelname == "ERROR"]
    assert errors
    assert "Could not open the input file" in errors[-1].getMessage()


def test_bad_config_value_exits_cleanly(tmp_path, capsys):
    cfg = tmp_path / "cfg.json"
    cfg.write_text('{"max_steps": "20"}', encoding="utf8")
    assert cli.main(["--db", str(tmp_path / "x.db"), "--config", str(cfg), "generate", "犬"]) == 1
    assert "max_steps" in capsys.readouterr().err


def test_config_show_and_set(tmp_path, capsys):
    import json

    cfg = tmp_path / "cfg.json"
    base = ["--config", str(cfg)]

    assert cli.main(base + ["config"]) == 0
    out = capsys.readouterr().out
    assert "default_class" in out
    assert "名詞" in out

    assert cli.main(base + ["config", "max_steps", "20"]) == 0
    assert json.loads(cfg.read_text(encoding="utf8"))["max_steps"] == 20

    assert cli.main(base + ["config", "max_steps"]) == 1
    assert cli.main(base + ["config", "nope", "1"]) == 1
    assert "No such option" in capsys.readouterr().err
