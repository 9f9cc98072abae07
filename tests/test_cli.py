"""End-to-end tests for the audit command and analyze_project."""
import json
from dataclasses import replace

from rich.console import Console
from typer.testing import CliRunner

from depsweep.main import analyze_project, app

runner = CliRunner()

REPORT_NAME = 'unused-code-report.json'


def read_report(root):
    return json.loads((root / REPORT_NAME).read_text(encoding='utf-8'))


def sections(report):
    return {key: value for key, value in report.items() if key != 'timestamp'}


class TestAuditCommand:
    """The depsweep audit command."""

    def test_relative_reference_scenario(self, make_project, tmp_path):
        """a.ts is referenced by b.ts; only b.ts is reported."""
        make_project({
            'a.ts': 'export const a = 1;\n',
            'b.ts': "import { a } from './a';\n",
        }, manifest={'dependencies': {}})

        result = runner.invoke(app, ['audit', str(tmp_path)])

        assert result.exit_code == 0, result.output
        report = read_report(tmp_path)
        assert [f['file'] for f in report['unusedFiles']['files']] == ['b.ts']
        assert 'Found 2 source files to analyze.' in result.output
        assert report['unusedFiles']['totalSize'] == (tmp_path / 'src' / 'b.ts').stat().st_size

    def test_dependency_scenario(self, make_project, tmp_path):
        """lodash is unused; eslint-plugin-foo is allowlisted."""
        make_project({
            'index.ts': "import React from 'react';\nimport cfg from './eslint-config';\n",
        }, manifest={
            'dependencies': {'react': '^18.2.0', 'lodash': '^4.17.21'},
            'devDependencies': {'eslint-plugin-foo': '^1.0.0'},
        })

        result = runner.invoke(app, ['audit', str(tmp_path)])

        assert result.exit_code == 0, result.output
        report = read_report(tmp_path)
        assert report['unusedDependencies'] == {
            'count': 1,
            'dependencies': [{'name': 'lodash', 'version': '^4.17.21'}],
        }
        assert 'lodash@^4.17.21' in result.output

    def test_missing_root_exits_without_report(self, tmp_path):
        result = runner.invoke(app, ['audit', str(tmp_path)])

        assert result.exit_code == 1
        assert 'does not exist' in result.output
        assert not (tmp_path / REPORT_NAME).exists()

    def test_missing_manifest_still_reports_files(self, make_project, tmp_path):
        make_project({'orphan.ts': 'export {};\n'})

        result = runner.invoke(app, ['audit', str(tmp_path)])

        assert result.exit_code == 0, result.output
        report = read_report(tmp_path)
        assert report['unusedFiles']['count'] == 1
        assert report['unusedDependencies']['count'] == 0

    def test_custom_locations(self, tmp_path):
        (tmp_path / 'app').mkdir()
        (tmp_path / 'app' / 'widget.js').write_text('module.exports = 1;\n', encoding='utf-8')
        (tmp_path / 'web.json').write_text(json.dumps({'dependencies': {'axios': '1'}}), encoding='utf-8')

        result = runner.invoke(app, [
            'audit', str(tmp_path),
            '--source-dir', 'app',
            '--manifest', 'web.json',
            '--report', 'out.json',
        ])

        assert result.exit_code == 0, result.output
        report = json.loads((tmp_path / 'out.json').read_text(encoding='utf-8'))
        assert report['unusedFiles']['files'] == [{'file': 'widget.js', 'size': 20}]
        assert report['unusedDependencies']['dependencies'][0]['name'] == 'axios'

    def test_unwritable_report_location_fails(self, make_project, tmp_path):
        make_project({'a.ts': ''})

        result = runner.invoke(app, ['audit', str(tmp_path), '--report', 'no/such/dir/report.json'])

        assert result.exit_code == 1
        assert 'Cannot write report' in result.output

    def test_reachability_flag(self, make_project, tmp_path):
        make_project({
            'index.ts': '',
            'orphan.ts': "import './helper';\n",
            'helper.ts': '',
        })

        result = runner.invoke(app, ['audit', str(tmp_path), '--reachability'])

        assert result.exit_code == 0, result.output
        files = {f['file'] for f in read_report(tmp_path)['unusedFiles']['files']}
        assert files == {'orphan.ts', 'helper.ts'}

    def test_version(self):
        result = runner.invoke(app, ['--version'])
        assert result.exit_code == 0
        assert 'depsweep' in result.output


class TestAnalyzeProject:
    """The analysis pipeline without the CLI."""

    def test_idempotent_apart_from_timestamp(self, make_project):
        config = make_project({
            'components/Button.tsx': 'export default 1;\n',
            'components/Unused.tsx': 'export default 2;\n' * 10,
            'pages/home/index.tsx': "import Button from '../../components/Button';\nimport dayjs from 'dayjs';\n",
        }, manifest={'dependencies': {'dayjs': '1', 'moment': '2'}})

        first = analyze_project(config).to_dict()
        second = analyze_project(config).to_dict()

        assert sections(first) == sections(second)
        assert [f['file'] for f in first['unusedFiles']['files']] == ['components/Unused.tsx']
        assert [d['name'] for d in first['unusedDependencies']['dependencies']] == ['moment']

    def test_does_not_write_report(self, make_project, tmp_path):
        config = make_project({'a.ts': ''})
        analyze_project(config)
        assert not (tmp_path / REPORT_NAME).exists()

    def test_scoped_dependency_used_via_subpath(self, make_project):
        config = make_project(
            {'index.ts': "import { Button } from '@scope/name/subpath';\n"},
            manifest={'dependencies': {'@scope/name': '^1.0.0'}},
        )
        report = analyze_project(config)
        assert report.unused_dependencies == []

    def test_exempt_files_never_reported(self, make_project):
        config = make_project({
            'app.ts': '',
            'types.ts': '',
            'constants.ts': '',
            'main.ts': '',
            'pages/index.tsx': '',
        })
        assert analyze_project(config).unused_files == []
        assert analyze_project(replace(config, reachability=True)).unused_files == []

    def test_progress_goes_to_given_console(self, make_project):
        config = make_project({'a.ts': '', 'b/c.tsx': ''})
        console = Console(record=True, width=200, color_system=None)

        analyze_project(config, console)

        assert 'Found 2 source files to analyze.' in console.export_text()
