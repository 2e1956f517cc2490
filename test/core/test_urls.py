from dataclasses import replace
from pathlib import PurePosixPath

import pytest

from coursesite.config import DEFAULT_CONFIG, SiteConfig
from coursesite.core import urls


@pytest.fixture
def config() -> SiteConfig:
    return replace(DEFAULT_CONFIG, base_url='/course/', trailing_slash=None)


def test_normalize_base_url() -> None:
    assert urls.normalize_base_url('') == '/'
    assert urls.normalize_base_url('/') == '/'
    assert urls.normalize_base_url('course') == '/course/'
    assert urls.normalize_base_url('//course//nested/') == '/course/nested/'


@pytest.mark.parametrize('trailing_slash, expected', [
    (None, '/course/building-library/project-setup'),
    (True, '/course/building-library/project-setup/'),
    (False, '/course/building-library/project-setup'),
])
def test_url_for_trailing_slash(config: SiteConfig, trailing_slash, expected: str) -> None:
    config = replace(config, trailing_slash=trailing_slash)
    assert urls.url_for(config, '/building-library/project-setup') == expected
    assert urls.url_for(config, 'building-library/project-setup/') == expected


def test_url_for_root(config: SiteConfig) -> None:
    for trailing_slash in (None, True, False):
        assert urls.url_for(replace(config, trailing_slash=trailing_slash), '/') == '/course/'


def test_url_for_keeps_suffix(config: SiteConfig) -> None:
    config = replace(config, trailing_slash=True)
    assert urls.url_for(config, '/intro#setup') == '/course/intro/#setup'
    assert urls.url_for(config, '/intro?tab=npm') == '/course/intro/?tab=npm'


def test_url_for_does_not_prefix_twice(config: SiteConfig) -> None:
    assert urls.url_for(config, '/course/intro') == '/course/intro'


def test_strip_base_url(config: SiteConfig) -> None:
    assert urls.strip_base_url(config, '/course/intro') == '/intro'
    assert urls.strip_base_url(config, '/intro') == '/intro'
    assert urls.strip_base_url(replace(config, base_url='/'), '/intro') == '/intro'


def test_url_for_external(config: SiteConfig) -> None:
    assert urls.url_for(config, 'https://vuejs.org/') == 'https://vuejs.org/'
    assert urls.url_for(config, '//gitlab.com') == '//gitlab.com'
    assert urls.url_for(config, 'mailto:team@example.com') == 'mailto:team@example.com'
    assert urls.url_for(config, '#top') == '#top'


def test_asset_url_never_adds_trailing_slash(config: SiteConfig) -> None:
    config = replace(config, trailing_slash=True)
    assert urls.asset_url(config, 'img/logo.svg') == '/course/img/logo.svg'
    assert urls.asset_url(config, '/assets/site.css') == '/course/assets/site.css'


def test_absolute_url(config: SiteConfig) -> None:
    assert urls.absolute_url(config, '/intro') == 'https://shootingstar.github.io/course/intro'


def test_route_for_doc(config: SiteConfig) -> None:
    assert urls.route_for_doc(config, 'consuming/authentication') == '/consuming/authentication'
    config = replace(config, docs_route_base_path='docs')
    assert urls.route_for_doc(config, 'intro') == '/docs/intro'


def test_output_path_for() -> None:
    assert urls.output_path_for('/', False) == PurePosixPath('index.html')
    assert urls.output_path_for('/intro', False) == PurePosixPath('intro.html')
    assert urls.output_path_for('/intro', True) == PurePosixPath('intro/index.html')
    assert urls.output_path_for('/a/b/', None) == PurePosixPath('a/b/index.html')
