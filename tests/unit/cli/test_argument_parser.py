"""Unit tests for CLI ArgumentParser."""

import pytest

from simforcing.cli.argument_parser import CLIParser
from simforcing.cli.commands import InputCommands, OutputCommands

pytestmark = [pytest.mark.unit, pytest.mark.cli, pytest.mark.quick]


class TestParserInitialization:
    """Test CLIParser initialization."""

    def test_parser_creation(self):
        parser = CLIParser()
        assert parser.parser is not None

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            CLIParser().parse_args([])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as info:
            CLIParser().parse_args(['--version'])
        assert info.value.code == 0
        assert 'simforcing' in capsys.readouterr().out


class TestGlobalOptions:
    def test_debug_before_command(self):
        args = CLIParser().parse_args(['--debug', 'inspect', 'era5.nc', 't2m'])
        assert args.debug is True

    def test_debug_after_command(self):
        args = CLIParser().parse_args(['inspect', 'era5.nc', 't2m', '--debug'])
        assert args.debug is True

    def test_debug_not_set(self):
        args = CLIParser().parse_args(['inspect', 'era5.nc', 't2m'])
        assert not getattr(args, 'debug', False)


class TestCommands:
    def test_inspect(self):
        args = CLIParser().parse_args(['inspect', 'era5.nc', 't2m'])
        assert args.file == 'era5.nc'
        assert args.varname == 't2m'
        assert args.func is InputCommands.inspect

    def test_evaluate(self):
        args = CLIParser().parse_args(
            ['evaluate', 'era5.nc', 't2m', '--time', '0', '--time', '3600.5', '--config', 'c.yaml']
        )
        assert args.time == [0.0, 3600.5]
        assert args.config == 'c.yaml'
        assert args.func is InputCommands.evaluate

    def test_evaluate_requires_time(self):
        with pytest.raises(SystemExit):
            CLIParser().parse_args(['evaluate', 'era5.nc', 't2m'])

    def test_output_path(self):
        args = CLIParser().parse_args(['output-path', 'runs/sim', '--remove-preexisting'])
        assert args.path == 'runs/sim'
        assert args.remove_preexisting is True
        assert args.func is OutputCommands.output_path

    def test_unknown_command(self):
        with pytest.raises(SystemExit):
            CLIParser().parse_args(['regrid', 'era5.nc'])
