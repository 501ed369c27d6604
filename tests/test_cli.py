import run_brainfuck


class TestMain:

    def test_runs_named_program(self, capsys):
        assert run_brainfuck.main(["hello_world"]) == 0
        assert capsys.readouterr().out == "Hello World!\n"

    def test_default_program_is_hello_world(self, capsys):
        assert run_brainfuck.main([]) == 0
        assert capsys.readouterr().out == "Hello World!\n"

    def test_code_with_input(self, capsys):
        assert run_brainfuck.main(["--code", ",+.", "--input", "A"]) == 0
        assert capsys.readouterr().out == "B"

    def test_program_file(self, tmp_path, capsys):
        path = tmp_path / "prog.bf"
        path.write_text("+" * 33 + ". done")
        assert run_brainfuck.main(["--file", str(path)]) == 0
        assert capsys.readouterr().out == "!"

    def test_unknown_program(self, capsys):
        assert run_brainfuck.main(["no_such_program"]) == run_brainfuck.EXIT_FAULT
        assert "hello_world" in capsys.readouterr().err

    def test_fault_exit_status(self, capsys):
        assert run_brainfuck.main(["--code", "]"]) == run_brainfuck.EXIT_FAULT
        err = capsys.readouterr().err
        assert "UnmatchedBracket" in err
        assert "ip=0" in err

    def test_tape_overrun(self, capsys):
        assert run_brainfuck.main(["--code", ">>>", "--tape-size", "2"]) == run_brainfuck.EXIT_FAULT
        assert "TapeOverrun" in capsys.readouterr().err

    def test_step_limit_exit_status(self, capsys):
        assert run_brainfuck.main(["--code", "+[]", "--max-steps", "20"]) == run_brainfuck.EXIT_STEP_LIMIT
        assert "20 steps" in capsys.readouterr().err

    def test_eof_error(self, capsys):
        assert run_brainfuck.main(["--code", ",", "--eof", "error"]) == run_brainfuck.EXIT_FAULT
        assert "InputExhausted" in capsys.readouterr().err

    def test_list(self, capsys):
        assert run_brainfuck.main(["--list"]) == 0
        assert capsys.readouterr().out.split() == ["add_two_and_five", "cell_size", "hello_world"]

    def test_debug_mode_prints_state(self, capsys):
        assert run_brainfuck.main(["--code", "++", "--debug"]) == 0
        out = capsys.readouterr().out
        assert out.count("Current byte:") == 2
        assert " ^" in out

    def test_step_mode_waits_for_enter(self, monkeypatch, capsys):
        import io
        monkeypatch.setattr("sys.stdin", io.StringIO("\n\n\n"))
        assert run_brainfuck.main(["--code", "+++", "--step"]) == 0
        assert capsys.readouterr().out == ""

    def test_zero_tape_size_is_reported(self, capsys):
        assert run_brainfuck.main(["--code", "+", "--tape-size", "0"]) == run_brainfuck.EXIT_FAULT
        assert "tape_size must be a positive integer" in capsys.readouterr().err

    def test_negative_tape_size_is_reported(self, capsys):
        assert run_brainfuck.main(["--code", "+", "--tape-size", "-5"]) == run_brainfuck.EXIT_FAULT
        assert "positive integer" in capsys.readouterr().err

    def test_bad_environment_config_is_reported(self, monkeypatch, capsys):
        monkeypatch.setenv("BF_TAPE_SIZE", "lots")
        assert run_brainfuck.main(["--code", "+"]) == run_brainfuck.EXIT_FAULT
        assert "BF_TAPE_SIZE must be an integer" in capsys.readouterr().err

    def test_input_is_fed_as_utf8_bytes(self, capsys):
        assert run_brainfuck.main(["--code", ",.,.,.", "--input", "€"]) == 0
        assert capsys.readouterr().out == "\xe2\x82\xac"

    def test_zero_max_steps_means_unlimited(self, capsys):
        assert run_brainfuck.main(["--code", "+++", "--max-steps", "0"]) == 0
        assert run_brainfuck.main(["--code", "+++", "--max-steps", "-1", "--debug"]) == 0
