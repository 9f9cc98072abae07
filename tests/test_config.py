"""Tests for configuration loading from defaults, environment and overrides."""
import pytest

from depsweep.config import DEFAULT_EXTENSIONS, AuditConfig, load_config

ENV_VARS = (
    'DEPSWEEP_SOURCE_DIR',
    'DEPSWEEP_REPORT_FILE',
    'DEPSWEEP_MANIFEST',
    'DEPSWEEP_EXTENSIONS',
    'DEPSWEEP_EXCLUDE_DIRS',
    'DEPSWEEP_EXEMPT_PATTERNS',
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without DEPSWEEP_* variables."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_default_locations(self, tmp_path):
        config = load_config(tmp_path)

        assert config.project_root == tmp_path.resolve()
        assert config.source_root == tmp_path.resolve() / 'src'
        assert config.report_path == tmp_path.resolve() / 'unused-code-report.json'
        assert config.manifest_path == tmp_path.resolve() / 'package.json'
        assert config.extensions == DEFAULT_EXTENSIONS
        assert config.reachability is False

    def test_config_is_immutable(self, tmp_path):
        config = AuditConfig(project_root=tmp_path)
        with pytest.raises(AttributeError):
            config.source_dir = 'lib'


class TestEnvironment:
    def test_environment_variables(self, tmp_path, monkeypatch):
        monkeypatch.setenv('DEPSWEEP_SOURCE_DIR', 'client')
        monkeypatch.setenv('DEPSWEEP_EXTENSIONS', 'ts, vue ,.mjs')
        monkeypatch.setenv('DEPSWEEP_EXCLUDE_DIRS', 'build,coverage')

        config = load_config(tmp_path)

        assert config.source_dir == 'client'
        assert config.extensions == ('.ts', '.vue', '.mjs')
        assert config.exclude_dirs == ('build', 'coverage')

    def test_dotenv_file_in_project(self, tmp_path, monkeypatch):
        # Register the variable so monkeypatch removes what load_dotenv sets
        monkeypatch.setenv('DEPSWEEP_REPORT_FILE', 'placeholder')
        monkeypatch.delenv('DEPSWEEP_REPORT_FILE')
        (tmp_path / '.env').write_text('DEPSWEEP_REPORT_FILE=reports/usage.json\n', encoding='utf-8')

        config = load_config(tmp_path)

        assert config.report_path == tmp_path.resolve() / 'reports' / 'usage.json'

    def test_environment_beats_dotenv(self, tmp_path, monkeypatch):
        monkeypatch.setenv('DEPSWEEP_SOURCE_DIR', 'client')
        (tmp_path / '.env').write_text('DEPSWEEP_SOURCE_DIR=web\n', encoding='utf-8')

        assert load_config(tmp_path).source_dir == 'client'

    def test_overrides_win_over_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv('DEPSWEEP_SOURCE_DIR', 'client')

        config = load_config(tmp_path, source_dir='lib', report_file=None, reachability=True)

        assert config.source_dir == 'lib'
        assert config.report_file == 'unused-code-report.json'
        assert config.reachability is True
