"""CLI commands implemented with click.

Every command opens the vault file, performs one operation and writes the
file back only when the vault was modified.
"""
from __future__ import annotations
import logging, click
from contextlib import contextmanager
from pathlib import Path
from passu.config.settings import LOG_LEVEL
from passu.lib.errors import PassuError
from passu.lib.policy import PasswordPolicy
from passu.lib.storage import VaultStorage

GENERATE_PROMPT = 'Password (leave empty to generate)'

master_password = click.option('--password', prompt='Master password', hide_input=True, help='Master password of the vault.')

def policy_options(f):
	"""Attach y/n policy options; anything not given stays unset."""
	opts = [
		click.option('--length', type=int, default=None, help='Password length.'),
		click.option('--lowercase', type=click.BOOL, default=None, metavar='y/n', help='Use lowercase letters.'),
		click.option('--uppercase', type=click.BOOL, default=None, metavar='y/n', help='Use uppercase letters.'),
		click.option('--numbers', type=click.BOOL, default=None, metavar='y/n', help='Use numbers.'),
		click.option('--special', type=click.BOOL, default=None, metavar='y/n', help='Use special characters.'),
	]
	for opt in reversed(opts):
		f = opt(f)
	return f

def _policy(length, lowercase, uppercase, numbers, special) -> PasswordPolicy:
	return PasswordPolicy(length, lowercase, uppercase, numbers, special)

@contextmanager
def open_vault(storage: VaultStorage, password: str):
	try:
		vault = storage.load(password)
		yield vault
		if vault.modified:
			storage.save(vault)
	except PassuError as e:
		raise click.ClickException(str(e))

def _new_master(password: str) -> str:
	if not password.strip():
		raise click.ClickException('Empty password')
	return password

@click.group()
@click.option('--file', 'path', envvar='PASSU_FILE', type=click.Path(dir_okay=False, path_type=Path), default=None, help='Password file.')
@click.option('--verbose', '-v', is_flag=True, help='Debug logging.')
@click.pass_context
def cli(ctx, path, verbose):
	"""passu: simple password manager"""
	logging.basicConfig(level=logging.DEBUG if verbose else LOG_LEVEL, format='%(levelname)s %(name)s: %(message)s')
	ctx.obj = VaultStorage(path)

@cli.command()
@click.option('--password', prompt='Master password', hide_input=True, confirmation_prompt=True)
@click.option('--force', is_flag=True, help='Recreate if the password file already exists.')
@click.pass_obj
def init(storage, password, force):
	"""Create a new password database."""
	try:
		storage.create(_new_master(password), force=force)
	except PassuError as e:
		raise click.ClickException(str(e))
	click.echo(f'Password database created at {storage.path}')

@cli.command('change-master-password')
@master_password
@click.option('--new-password', prompt='New master password', hide_input=True, confirmation_prompt=True)
@click.pass_obj
def change_master_password(storage, password, new_password):
	"""Change database password."""
	with open_vault(storage, password) as vault:
		vault.set_password(_new_master(new_password))
	click.echo('Master password changed.')

@cli.command()
@click.option('--dest', type=click.Path(dir_okay=False, path_type=Path), default=None, help='Backup file path.')
@click.pass_obj
def backup(storage, dest):
	"""Copy the password file to a backup."""
	try:
		target = storage.backup(dest)
	except PassuError as e:
		raise click.ClickException(str(e))
	click.echo(f'Backup written: {target}')

# --- default policy ---

@cli.group('default-policy')
def default_policy():
	"""View or change the default password policy."""

@default_policy.command('view')
@master_password
@click.pass_obj
def default_policy_view(storage, password):
	"""View default policy."""
	with open_vault(storage, password) as vault:
		click.echo(vault.default_policy.describe())

@default_policy.command('change')
@master_password
@policy_options
@click.pass_obj
def default_policy_change(storage, password, **opts):
	"""Change default policy (options not given are kept)."""
	with open_vault(storage, password) as vault:
		vault.set_default_policy(_policy(**opts))
		click.echo(vault.default_policy.describe())

# --- password entries ---

@cli.group()
def passwords():
	"""Manage password entries."""

@passwords.command('list')
@click.argument('prefix', default='')
@master_password
@click.pass_obj
def list_entries(storage, prefix, password):
	"""List password entries."""
	with open_vault(storage, password) as vault:
		names = sorted(e.name for e in vault.find_entries(prefix))
	if not names:
		click.echo('No entries found')
	for name in names:
		click.echo(name)

@passwords.command('new')
@click.argument('name')
@click.argument('description', default='')
@master_password
@click.option('--secret', prompt=GENERATE_PROMPT, hide_input=True, default='', show_default=False, help='Entry password; empty to generate.')
@click.pass_obj
def new_entry(storage, name, description, password, secret):
	"""Create new password entry."""
	with open_vault(storage, password) as vault:
		vault.add_entry(name, secret, description)
		if not secret:
			vault.generate_password(name)
	click.echo('Password added')

@passwords.command('show')
@click.argument('name')
@click.option('--pass-only', '-p', is_flag=True, help='Only show password.')
@master_password
@click.pass_obj
def show_entry(storage, name, pass_only, password):
	"""Show password entry."""
	with open_vault(storage, password) as vault:
		entry = vault.get_entry(name)
	if entry is None:
		raise click.ClickException('Entry not found')
	if pass_only:
		click.echo(entry.password)
		return
	click.echo(f'Name: {entry.name}')
	click.echo(f'Password: ({len(entry.password)} characters)')
	if entry.description:
		click.echo(f'Description: \n {entry.description}')
	else:
		click.echo('No description')

@passwords.command('edit')
@click.argument('name')
@click.option('--new-name', '-n', default=None, help='Change name of entry.')
@click.option('--description', '-d', default=None, help='Change description of entry.')
@click.option('--change-password', '-p', is_flag=True, help='Change password.')
@master_password
@click.pass_obj
def edit_entry(storage, name, new_name, description, change_password, password):
	"""Edit a password entry."""
	with open_vault(storage, password) as vault:
		secret = None
		if change_password:
			secret = click.prompt(GENERATE_PROMPT, hide_input=True, default='', show_default=False)
		entry = vault.update_entry(name, new_name=new_name, new_password=secret or None, new_description=description)
		if change_password and not secret:
			vault.generate_password(entry.name)
	click.echo('Entry updated')

@passwords.command('delete')
@click.argument('name')
@master_password
@click.pass_obj
def delete_entry(storage, name, password):
	"""Delete a password entry."""
	with open_vault(storage, password) as vault:
		vault.remove_entry(name)
	click.echo('Entry removed')

@passwords.command('generate')
@click.argument('name')
@master_password
@click.pass_obj
def generate_entry(storage, name, password):
	"""Generate a new password for an entry from its policy."""
	with open_vault(storage, password) as vault:
		entry = vault.generate_password(name)
	click.echo(f'Password generated ({len(entry.password)} characters)')

@passwords.group('policy')
def entry_policy():
	"""View or change the password policy of an entry."""

@entry_policy.command('view')
@click.argument('name')
@master_password
@click.pass_obj
def entry_policy_view(storage, name, password):
	"""Show password policy of entry."""
	with open_vault(storage, password) as vault:
		entry = vault.get_entry(name)
		if entry is None:
			raise click.ClickException('Entry not found')
		click.echo(entry.policy_override.describe(vault.default_policy))

@entry_policy.command('change')
@click.argument('name')
@master_password
@policy_options
@click.pass_obj
def entry_policy_change(storage, name, password, **opts):
	"""Replace the policy override of an entry (options not given use the default)."""
	with open_vault(storage, password) as vault:
		vault.update_entry(name, new_policy_override=_policy(**opts))
	click.echo('Entry policy updated')
