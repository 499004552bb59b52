"""Tests for compose document decoding."""
import pytest

from composebake.config.loader import ComposeLoader
from composebake.models.errors import ComposeDecodeError


@pytest.fixture
def loader():
    """Create loader instance."""
    return ComposeLoader()


def test_build_shorthand(loader):
    compose = loader.loads(b"services:\n  db:\n    build: ./db\n")
    assert compose.services['db'].build.context == './db'


def test_scalar_variants_kept(loader):
    compose = loader.loads("""
services:
  app:
    build:
      args:
        INT: 123
        BOOL: true
        FLOAT: 1.5
        STR: text
        UNSET:
""")
    assert compose.services['app'].build.args == {
        'INT': 123, 'BOOL': True, 'FLOAT': 1.5, 'STR': 'text', 'UNSET': None,
    }


def test_list_forms(loader):
    compose = loader.loads("""
services:
  app:
    build:
      args:
        - A=1
        - B
      secrets:
        - token
        - source: aws
          target: credentials
    environment:
      - KEY=value
      - BARE
    env_file:
      - one.env
      - path: two.env
        required: false
""")
    service = compose.services['app']
    assert service.build.args == {'A': '1', 'B': None}
    assert service.build.secrets == ['token', 'aws']
    assert service.environment == {'KEY': 'value', 'BARE': None}
    assert [(ref.path, ref.required) for ref in service.env_file] == [
        ('one.env', True), ('two.env', False),
    ]


def test_env_file_string(loader):
    compose = loader.loads("services:\n  app:\n    image: x\n    env_file: .env\n")
    assert compose.services['app'].env_file[0].path == '.env'


def test_extension_block_kept(loader):
    compose = loader.loads("""
services:
  app:
    build:
      context: .
      x-bake:
        pull: true
""")
    assert compose.services['app'].build.extension('x-bake') == {'pull': True}
    assert compose.services['app'].build.extension('x-other') is None


def test_service_order_preserved(loader):
    compose = loader.loads("services:\n  b: {image: b}\n  a: {image: a}\n  c: {image: c}\n")
    assert compose.service_names() == ['b', 'a', 'c']


def test_numeric_service_name(loader):
    compose = loader.loads("services:\n  123:\n    build: .\n")
    assert compose.service_names() == ['123']


def test_null_service_body(loader):
    compose = loader.loads("services:\n  empty:\n")
    assert compose.services['empty'].build is None
    assert compose.services['empty'].image is None


def test_invalid_yaml(loader):
    with pytest.raises(ComposeDecodeError):
        loader.loads("services:\n  app: [\n")


def test_not_a_mapping(loader):
    with pytest.raises(ComposeDecodeError) as exc_info:
        loader.loads("- just\n- a list\n")
    assert "top level must be a mapping" in str(exc_info.value)


def test_no_services(loader):
    with pytest.raises(ComposeDecodeError) as exc_info:
        loader.loads("version: '3'\n")
    assert "no services section found" in str(exc_info.value)


def test_wrong_field_type(loader):
    with pytest.raises(ComposeDecodeError) as exc_info:
        loader.loads("services:\n  app:\n    build:\n      tags: {a: b}\n")
    assert "services.app.build.tags" in str(exc_info.value)


def test_load_file(loader, tmp_path):
    path = tmp_path / "compose.yaml"
    path.write_text("services:\n  app:\n    build: .\n")
    assert loader.load(path).service_names() == ['app']


def test_load_missing_file(loader, tmp_path):
    with pytest.raises(ComposeDecodeError) as exc_info:
        loader.load(tmp_path / "nope.yml")
    assert "Failed to read compose file" in str(exc_info.value)
