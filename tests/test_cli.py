from mdlgraphics.cli import main


def test_missing_file_fails(tmp_path, capsys):
    status = main([str(tmp_path / "absent.mdl")])
    assert status == 1
    assert "File open failed" in capsys.readouterr().err


def test_runs_program_file(tmp_path, capsys):
    path = tmp_path / "prog.mdl"
    path.write_text("line 0 0 0 10 10 0\n")
    assert main([str(path)]) == 0
    assert "Drew image in" in capsys.readouterr().out


def test_default_program_name(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "varytest.mdl").write_text("push\npop\n")
    assert main([]) == 0
    assert "Drew image in" in capsys.readouterr().out


def test_bad_program_fails(tmp_path, capsys):
    path = tmp_path / "bad.mdl"
    path.write_text("vary k 0 1 0 1\n")
    assert main([str(path)]) == 1
    assert "Vary exists without frames" in capsys.readouterr().err