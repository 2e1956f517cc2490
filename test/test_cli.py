from pathlib import Path

from typer.testing import CliRunner

from coursesite import __version__
from coursesite.cli import app

RUNNER = CliRunner()


def test_check_version() -> None:
    assert __version__ in RUNNER.invoke(app, '--version').stdout


def test_build(site_dir: Path, tmp_path: Path) -> None:
    out = tmp_path / 'out'
    result = RUNNER.invoke(app, ['build', str(site_dir), '--out', str(out), '--no-progress'])
    assert result.exit_code == 0
    assert (out / 'index.html').is_file()
    assert (out / 'intro.html').is_file()
    assert (out / 'img' / 'logo.svg').is_file()


def test_build_fails_on_missing_document(site_dir: Path, tmp_path: Path) -> None:
    (site_dir / 'docs' / 'intro.md').unlink()
    result = RUNNER.invoke(app, ['build', str(site_dir), '--out', str(tmp_path / 'out'),
                                 '--no-progress'])
    assert result.exit_code == 1
    assert not (tmp_path / 'out').exists()


def test_build_with_warn_policy(site_dir: Path, tmp_path: Path) -> None:
    (site_dir / 'docs' / 'intro.md').unlink()
    result = RUNNER.invoke(app, ['build', str(site_dir), '--out', str(tmp_path / 'out'),
                                 '--no-progress', '--on-broken-links', 'warn'])
    assert result.exit_code == 0
    assert 'broken reference' in result.stdout


def test_check(site_dir: Path) -> None:
    assert RUNNER.invoke(app, ['check', str(site_dir)]).exit_code == 0
    (site_dir / 'docs' / 'advanced' / 'documentation.md').unlink()
    assert RUNNER.invoke(app, ['check', str(site_dir)]).exit_code == 1


def test_site_config_file(site_dir: Path, tmp_path: Path) -> None:
    (site_dir / 'coursesite.json').write_text(
        '{"title": "Other Course", "url": "https://example.com", "baseUrl": "/other/",'
        ' "docs": {"routeBasePath": "/"}}'
    )
    out = tmp_path / 'out'
    result = RUNNER.invoke(app, ['build', str(site_dir), '--out', str(out), '--no-progress'])
    assert result.exit_code == 0
    home = (out / 'index.html').read_text()
    assert 'Other Course' in home
    assert 'href="/other/intro/"' not in home
    assert 'href="/other/intro"' in home


def test_rejects_non_json_config(site_dir: Path, tmp_path: Path) -> None:
    config = tmp_path / 'config.yaml'
    config.write_text('title: nope')
    result = RUNNER.invoke(app, ['build', str(site_dir), '--config', str(config)])
    assert result.exit_code != 0


def test_sidebar() -> None:
    result = RUNNER.invoke(app, ['sidebar'])
    assert result.exit_code == 0
    assert 'courseSidebar' in result.stdout
    assert 'building-library/project-setup' in result.stdout
    assert 'collapsed' in result.stdout
