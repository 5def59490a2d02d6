import json
import runpy
from pathlib import Path

import pytest

from cryptography.fernet import Fernet

from memstore_lib.storage import EncryptedSerializer, Store, YAMLSerializer

SCRIPT = Path(__file__).resolve().parents[2] / 'scripts' / 'dump_snapshot.py'


@pytest.fixture
def dump_main():
    return runpy.run_path(str(SCRIPT))['main']


def test_dump_json_snapshot(tmp_path, dump_main, capsys):
    target = tmp_path / 'store.json'
    s = Store(target)
    s.set('name', 'Alice')
    s.set('age', 30)
    s.close()

    assert dump_main([str(target), '--json']) == 0
    out, err = capsys.readouterr()
    assert json.loads(out) == {'name': 'Alice', 'age': 30}
    assert 'entries: 2' in err


def test_dump_yaml_snapshot_to_file(tmp_path, dump_main, capsys):
    target = tmp_path / 'store.yml'
    s = Store(target, serializer=YAMLSerializer())
    s.set('k', [1, 2])
    s.close()

    out_file = tmp_path / 'out.txt'
    assert dump_main([str(target), '-s', 'yaml', '-o', str(out_file), '-q']) == 0
    assert out_file.read_text(encoding='utf-8') == "{'k': [1, 2]}"
    out, err = capsys.readouterr()
    assert out == '' and err == ''


def test_dump_missing_file(tmp_path, dump_main):
    assert dump_main([str(tmp_path / 'nope.json')]) == 2


def test_dump_undecodable_file(tmp_path, dump_main):
    target = tmp_path / 'bad.json'
    target.write_bytes(b'not json')
    assert dump_main([str(target)]) == 3


def test_dump_encrypted_snapshot_with_key(tmp_path, dump_main, capsys):
    key = Fernet.generate_key()
    target = tmp_path / 'store.enc'
    s = Store(target, serializer=EncryptedSerializer(key=key))
    s.set('secret', 'value')
    s.close()

    assert dump_main([str(target), '-s', 'encrypted', '--key', key.decode('ascii'), '--json', '-q']) == 0
    out, _ = capsys.readouterr()
    assert json.loads(out) == {'secret': 'value'}
    # without the key the snapshot cannot be decoded
    assert dump_main([str(target), '-s', 'encrypted', '-q']) == 3
