from click.testing import CliRunner
from passu.cli.commands import cli
from passu import main as entry

def test_cli_help():
    r = CliRunner().invoke(cli, ['--help'])
    assert r.exit_code == 0
    assert 'init' in r.output
    assert 'passwords' in r.output

def test_passwords_help_lists_commands():
    r = CliRunner().invoke(cli, ['passwords', '--help'])
    assert r.exit_code == 0
    for name in ['list', 'new', 'show', 'edit', 'delete', 'generate', 'policy']:
        assert name in r.output

def test_entry_point_wraps_cli():
    assert entry.cli is cli
