"""Tests for command line handling."""

import contextlib
import io

import pytest

import big_clock.main as clock_main
from big_clock.build_info import format_version, get_version
from big_clock.main import handle_args, main


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    code = handle_args(argv, out=out, err=err)
    return code, out.getvalue(), err.getvalue()


def test_no_arguments_launches():
    assert _run([]) == (None, '', '')


@pytest.mark.parametrize('flag', ['--help', '-h'])
def test_help(flag):
    code, out, err = _run([flag])
    assert code == 0
    assert out.startswith('Usage: big_clock')
    assert 'ESC' in out and 'cycle background colors' in out
    assert err == ''


@pytest.mark.parametrize('flag', ['--version', '-v'])
def test_version(flag):
    code, out, _ = _run([flag])
    assert code == 0
    assert out.strip() == format_version()
    assert get_version() in out


def test_unknown_option_goes_to_stderr():
    code, out, err = _run(['--bogus'])
    assert code == 1
    assert out == ''
    assert 'big_clock: unknown option: --bogus' in err
    assert "--help" in err


def test_only_first_argument_is_considered():
    code, out, _ = _run(['-v', '--bogus'])
    assert code == 0
    assert format_version() in out


def test_output_follows_redirected_streams():
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        assert main(['--help']) == 0
        assert main(['-v']) == 0
        assert main(['--nope']) == 1
    assert 'Usage:' in out.getvalue()
    assert format_version() in out.getvalue()
    assert 'unknown option: --nope' in err.getvalue()
    assert 'unknown option' not in out.getvalue()


def test_main_does_not_launch_for_options(monkeypatch, capsys):
    def fail(*args, **kwargs):
        raise AssertionError("window must not be launched")

    monkeypatch.setattr(clock_main, 'Application', fail)
    assert main(['--help']) == 0
    assert main(['--nope']) == 1
    captured = capsys.readouterr()
    assert 'Usage:' in captured.out
    assert 'unknown option' in captured.err
