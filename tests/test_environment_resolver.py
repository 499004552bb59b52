"""Tests for build-argument resolution."""
import pytest

from composebake.models.compose import EnvFileRef
from composebake.models.errors import EnvFileError
from composebake.services.docker_compose import EnvironmentResolver


class TestInterpolate:
    """Test `$NAME` reference substitution."""

    def test_literal_passthrough(self, resolver):
        assert resolver.interpolate("FOO") == "FOO"

    def test_named_reference(self, resolver):
        assert resolver.interpolate("$FOO") == "bar"

    def test_braced_reference(self, resolver):
        assert resolver.interpolate("prefix-${FOO}-suffix") == "prefix-bar-suffix"

    def test_unset_becomes_empty(self, resolver):
        assert resolver.interpolate("$NOPE") == ""
        assert resolver.interpolate("a${NOPE}b") == "ab"

    def test_default_when_unset_or_empty(self, resolver):
        assert resolver.interpolate("${NOPE:-fallback}") == "fallback"
        assert resolver.interpolate("${EMPTY:-fallback}") == "fallback"
        assert resolver.interpolate("${FOO:-fallback}") == "bar"

    def test_default_when_unset_only(self, resolver):
        assert resolver.interpolate("${NOPE-fallback}") == "fallback"
        assert resolver.interpolate("${EMPTY-fallback}") == ""

    def test_escaped_dollar(self, resolver):
        assert resolver.interpolate("cost: $$5") == "cost: $5"

    def test_lone_dollar_kept(self, resolver):
        assert resolver.interpolate("a $ b") == "a $ b"


class TestResolveArgs:
    """Test the environment → env_file → process precedence."""

    def test_declaration_order_preserved(self, resolver):
        result = resolver.resolve_args({'Z': 'z', 'FOO': None, 'A': 'a'}, {}, [])
        assert list(result) == ['Z', 'FOO', 'A']

    def test_empty_string_treated_as_unset(self, resolver):
        assert resolver.resolve_args({'FOO': ''}, {}, []) == {'FOO': 'bar'}

    def test_unresolved_key_dropped(self, resolver):
        assert resolver.resolve_args({'MISSING': None, 'EMPTY': None}, {}, []) == {}

    def test_environment_entry_wins(self, resolver, env_file):
        path = env_file("FOO=from-file\n")
        result = resolver.resolve_args(
            {'FOO': None}, {'FOO': 'from-environment'}, [EnvFileRef(path=str(path))]
        )
        assert result == {'FOO': 'from-environment'}

    def test_env_file_wins_over_process(self, resolver, env_file):
        path = env_file("FOO=from-file\n")
        result = resolver.resolve_args({'FOO': None}, {}, [EnvFileRef(path=str(path))])
        assert result == {'FOO': 'from-file'}

    def test_environment_entry_without_value_falls_through(self, resolver):
        assert resolver.resolve_args({'FOO': None}, {'FOO': None}, []) == {'FOO': 'bar'}

    def test_later_env_file_overrides(self, resolver, env_file):
        first = env_file("KEY=one\n", name="first.env")
        second = env_file("KEY=two\n", name="second.env")
        result = resolver.resolve_args(
            {'KEY': None}, {}, [EnvFileRef(path=str(first)), EnvFileRef(path=str(second))]
        )
        assert result == {'KEY': 'two'}

    def test_relative_env_file(self, resolver, env_file):
        env_file("KEY=relative\n", name="build.env")
        assert resolver.resolve_args({'KEY': None}, {}, [EnvFileRef(path="build.env")]) == {
            'KEY': 'relative'
        }

    def test_missing_env_file_is_fatal(self, resolver):
        with pytest.raises(EnvFileError) as exc_info:
            resolver.resolve_args({}, {}, [EnvFileRef(path="missing.env")])
        assert "missing.env" in str(exc_info.value)

    def test_optional_env_file_skipped(self, resolver):
        result = resolver.resolve_args(
            {'FOO': None}, {}, [EnvFileRef(path="missing.env", required=False)]
        )
        assert result == {'FOO': 'bar'}


class TestParseEnvFile:
    """Test env_file syntax."""

    def test_syntax(self, resolver, env_file):
        path = env_file(
            "# comment\n"
            "\n"
            "PLAIN=value with spaces\n"
            "export EXPORTED=yes\n"
            "DOUBLE=\"quoted # not a comment\"\n"
            "SINGLE='single'\n"
            "INLINE=value # trailing comment\n"
            "EQUALS=a=b\n"
            "FOO\n"
            "UNSET_BARE\n"
        )

        assert resolver.parse_env_file(path) == {
            'PLAIN': 'value with spaces',
            'EXPORTED': 'yes',
            'DOUBLE': 'quoted # not a comment',
            'SINGLE': 'single',
            'INLINE': 'value',
            'EQUALS': 'a=b',
            'FOO': 'bar',
        }

    def test_quoted_value_with_trailing_comment(self, resolver, env_file):
        path = env_file("TOKEN='secret' # api token\nPLAIN=\"double\"  # note\n")
        assert resolver.parse_env_file(path) == {'TOKEN': 'secret', 'PLAIN': 'double'}

    def test_double_quoted_escapes(self, resolver, env_file):
        path = env_file('MULTI="a\\nb"\nRAW=\'a\\nb\'\n')
        assert resolver.parse_env_file(path) == {'MULTI': 'a\nb', 'RAW': 'a\\nb'}

    def test_quoted_comment_resolved_as_arg(self, resolver, env_file):
        path = env_file("TOKEN='secret' # api token\n")
        result = resolver.resolve_args({'TOKEN': None}, {}, [EnvFileRef(path=str(path))])
        assert result == {'TOKEN': 'secret'}

    def test_missing_file(self, resolver, tmp_path):
        with pytest.raises(EnvFileError) as exc_info:
            resolver.parse_env_file(tmp_path / "absent.env")
        assert "absent.env" in str(exc_info.value)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.env"
        path.write_bytes(b"KEY=\xff\xfe\n")
        resolver = EnvironmentResolver({}, tmp_path, encoding="utf-8")
        with pytest.raises(EnvFileError):
            resolver.parse_env_file(path)

    def test_does_not_touch_os_environ(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ONLY_IN_OS", "os-value")
        resolver = EnvironmentResolver({}, tmp_path)
        assert resolver.resolve_args({'ONLY_IN_OS': None}, {}, []) == {}
        assert resolver.interpolate("$ONLY_IN_OS") == ""
