import pytest
from passu.lib.entries import EntryStore, PasswordEntry
from passu.lib.errors import InvalidNameError, DuplicateEntryError, EntryNotFoundError
from passu.lib.policy import PasswordPolicy

def make_store():
    store = EntryStore()
    store.add('alpha', 'pw-a', 'first')
    store.add('beta', 'pw-b')
    store.add('alpine', 'pw-c', policy_override=PasswordPolicy(length=8))
    return store

def test_add_defaults():
    store = EntryStore()
    e = store.add('a-1', 'secret')
    assert e == PasswordEntry('a-1', 'secret', '', PasswordPolicy())
    assert store.get('a-1') is e

@pytest.mark.parametrize('name', ['a b', '', 'a_b', 'ä', 'name!', 'a\n'])
def test_add_invalid_name(name):
    store = make_store()
    with pytest.raises(InvalidNameError):
        store.add(name, 'pw')
    assert len(store) == 3

def test_add_duplicate_leaves_store_unchanged():
    store = make_store()
    before = store.all()
    with pytest.raises(DuplicateEntryError):
        store.add('beta', 'other')
    assert store.all() == before

def test_find_prefix_document_order():
    store = make_store()
    assert [e.name for e in store.find('al')] == ['alpha', 'alpine']
    assert [e.name for e in store.find('')] == ['alpha', 'beta', 'alpine']
    assert store.find('zzz') == []

def test_get_missing():
    assert make_store().get('nope') is None

def test_update_replaces_in_place():
    store = make_store()
    old = store.get('beta')
    new = store.update('beta', new_password='changed')
    assert new.password == 'changed'
    assert old.password == 'pw-b'  # old value is untouched
    assert [e.name for e in store.all()] == ['alpha', 'beta', 'alpine']
    assert store.get('beta') is new

def test_update_no_arguments_is_noop_replace():
    store = make_store()
    old = store.get('alpha')
    assert store.update('alpha') == old

def test_update_explicit_empty_values_apply():
    store = make_store()
    e = store.update('alpine', new_description='', new_policy_override=PasswordPolicy())
    assert e.description == ''
    assert e.policy_override.is_empty()

def test_rename():
    store = make_store()
    store.update('alpha', new_name='gamma')
    assert store.get('alpha') is None
    assert store.get('gamma').password == 'pw-a'
    assert [e.name for e in store.all()] == ['gamma', 'beta', 'alpine']
    store.add('alpha', 'again')
    assert 'alpha' in store

def test_rename_to_own_name_allowed():
    store = make_store()
    assert store.update('beta', new_name='beta').name == 'beta'

def test_update_errors_leave_store_unchanged():
    store = make_store()
    before = store.all()
    with pytest.raises(EntryNotFoundError):
        store.update('missing', new_password='x')
    with pytest.raises(InvalidNameError):
        store.update('alpha', new_name='bad name')
    with pytest.raises(DuplicateEntryError):
        store.update('alpha', new_name='beta')
    assert store.all() == before

def test_remove():
    store = make_store()
    removed = store.remove('alpha')
    assert removed.name == 'alpha'
    assert [e.name for e in store.all()] == ['beta', 'alpine']
    # index stays consistent after removal
    assert store.get('alpine').password == 'pw-c'
    store.update('alpine', new_name='delta')
    assert [e.name for e in store.all()] == ['beta', 'delta']

def test_remove_missing():
    store = make_store()
    with pytest.raises(EntryNotFoundError):
        store.remove('test')
    assert len(store) == 3

def test_entry_document_form():
    e = PasswordEntry('n', 'p', 'd', PasswordPolicy(use_special=False))
    doc = e.to_dict()
    assert doc == {'name': 'n', 'password': 'p', 'description': 'd', 'policyOverride': {'useSpecial': False}}
    assert PasswordEntry.from_dict(doc) == e
    assert PasswordEntry.from_dict({'name': 'n', 'password': 'p'}) == PasswordEntry('n', 'p')

def test_duplicate_names_rejected_on_construction():
    with pytest.raises(DuplicateEntryError):
        EntryStore([PasswordEntry('a', '1'), PasswordEntry('a', '2')])
