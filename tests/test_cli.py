'''
Command line interface tests
'''

import io

from pytest import raises

from rpncalc.cli import CLI, HELP
from rpncalc.lexer import Lexer


def run_stdin(monkeypatch, text, *args):
    monkeypatch.setattr('sys.stdin', io.StringIO(text))
    return CLI().run(args=list(args))


def test_expression(capsys):
    assert CLI().run(args=['-e', '5', '2', '/']) == 0
    assert capsys.readouterr().out == '2.5\n'


def test_expression_negative_numbers(capsys):
    assert CLI().run(args=['-e', '-3', '-4', '*']) == 0
    assert capsys.readouterr().out == '12\n'


def test_expression_error(capsys):
    assert CLI().run(args=['-e', '1', 'bogus']) == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.startswith('error: ')
    assert 'bogus' in captured.err


def test_empty_stack(capsys):
    assert CLI().run(args=['-e', '1', 'drop']) == 0
    assert capsys.readouterr().out == '(empty)\n'


def test_options(capsys):
    assert CLI().run(args=['-b', '16', '-k', '2', '-e', 'FF', '1', '3',
                           '/']) == 0
    assert capsys.readouterr().out == 'FF 0.55\n'


def test_stack_size(capsys):
    assert CLI().run(args=['-s', '2', '-e', '1', '2', '3']) == 1
    assert 'full' in capsys.readouterr().err


def test_bad_base_option():
    with raises(SystemExit):
        CLI().run(args=['-b', '40', '-e', '1'])


def test_lines_from_stdin(monkeypatch, capsys):
    status = run_stdin(monkeypatch, '1 2\n+\nhex 255 dec\n')
    assert status == 0
    assert capsys.readouterr().out == '1 2\n3\n3 597\n'


def test_status_is_last_line(monkeypatch, capsys):
    assert run_stdin(monkeypatch, 'bogus\n1\n') == 0
    assert run_stdin(monkeypatch, '1\nbogus\n') == 1


def test_help(monkeypatch, capsys):
    run_stdin(monkeypatch, '?\n')
    assert capsys.readouterr().out == HELP + '\n'


def test_quit_stops_reading(monkeypatch, capsys):
    assert run_stdin(monkeypatch, '1\nq\n2\n') == 0
    assert capsys.readouterr().out == '1\n'


def test_long_numbers_truncated(capsys):
    assert CLI().run(args=['-e', '2', '300', 'pow', 'bin']) == 0
    out = capsys.readouterr().out
    assert out.startswith('1000')
    assert out.endswith('...\n')
    assert len(out) == CLI.OUTPUT_LENGTH - 1 + len('...\n')


def test_dump(capsys):
    assert CLI().run(args=['-D', '-e', '1.5', 'atan2', 'pi', 'zz']) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[1:] == ["number\t'1.5'\t1.5",
                         "operator\t'atan2'\t2",
                         "operator\t'pi'\t0",
                         "unrecognized\t'zz'\tNone"]


def test_raw_grammar(capsys):
    assert CLI().run(args=['-G']) == 0
    assert capsys.readouterr().out == Lexer.LEXEME + '\n'
