'''
Global presentation settings of the course site.
'''

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Final, Literal, Optional, Sequence, get_args
from urllib.parse import urlsplit

from pygments.lexers import get_lexer_by_name
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from coursesite.core import urls
from coursesite.core.utils import JSONObject, PathLike, SupportsJSON, read_json, resolve_kwargs
from coursesite.exceptions import ConfigError

logger = logging.getLogger('coursesite')

BrokenLinksPolicy = Literal['ignore', 'log', 'warn', 'throw']
ColorModeName = Literal['light', 'dark']
NavbarPosition = Literal['left', 'right']


def _exactly_one(*values: Optional[str]) -> bool:
    return sum(1 for v in values if v) == 1


@dataclass(frozen=True)
class NavbarLogo:
    alt: str
    src: str


@dataclass(frozen=True)
class NavbarItem:
    label: str
    position: NavbarPosition = 'left'
    sidebar_id: Optional[str] = None
    to: Optional[str] = None
    href: Optional[str] = None

    def __post_init__(self) -> None:
        if not _exactly_one(self.sidebar_id, self.to, self.href):
            raise ConfigError(f'Navbar item "{self.label}" must set exactly one of '
                              'sidebar_id, to or href')
        if self.position not in get_args(NavbarPosition):
            raise ConfigError(f'Unknown navbar position "{self.position}"')

    @property
    def is_external(self) -> bool:
        return self.href is not None

    def to_json(self) -> JSONObject:
        json_obj: JSONObject = {'label': self.label,
                                'position': self.position}
        if self.sidebar_id:
            json_obj.update(type='docSidebar', sidebarId=self.sidebar_id)
        elif self.to:
            json_obj['to'] = self.to
        else:
            json_obj['href'] = self.href
        return json_obj

    @classmethod
    def from_json(cls, json_obj: Dict[str, Any]) -> 'NavbarItem':
        item_type = json_obj.get('type')
        if item_type not in (None, 'docSidebar'):
            raise ConfigError(f'Unsupported navbar item type "{item_type}"')
        return cls(json_obj.get('label', ''),
                   **resolve_kwargs(position=json_obj.get('position'),
                                    sidebar_id=json_obj.get('sidebarId'),
                                    to=json_obj.get('to'),
                                    href=json_obj.get('href')))


@dataclass(frozen=True)
class Navbar:
    title: str
    logo: Optional[NavbarLogo] = None
    items: Sequence[NavbarItem] = ()


@dataclass(frozen=True)
class FooterLink:
    label: str
    to: Optional[str] = None
    href: Optional[str] = None

    def __post_init__(self) -> None:
        if not _exactly_one(self.to, self.href):
            raise ConfigError(f'Footer link "{self.label}" must set exactly one of to or href')

    @property
    def is_external(self) -> bool:
        return self.href is not None


@dataclass(frozen=True)
class FooterLinkGroup:
    title: str
    items: Sequence[FooterLink] = ()


@dataclass(frozen=True)
class Footer:
    style: ColorModeName = 'dark'
    links: Sequence[FooterLinkGroup] = ()
    copyright: str = ''

    def render_copyright(self, year: int) -> str:
        return self.copyright.replace('{year}', str(year))


@dataclass(frozen=True)
class ColorMode:
    default_mode: ColorModeName = 'light'
    respect_prefers_color_scheme: bool = False

    def __post_init__(self) -> None:
        if self.default_mode not in get_args(ColorModeName):
            raise ConfigError(f'Unknown color mode "{self.default_mode}"')


@dataclass(frozen=True)
class HighlightConfig:
    '''
    Pygments style pair used for code blocks in the light and dark color modes.
    '''
    theme: str = 'default'
    dark_theme: str = 'dracula'
    additional_languages: Sequence[str] = ()

    def __post_init__(self) -> None:
        for style in (self.theme, self.dark_theme):
            try:
                get_style_by_name(style)
            except ClassNotFound as e:
                raise ConfigError(f'Unknown highlight theme "{style}"') from e
        for language in self.additional_languages:
            try:
                get_lexer_by_name(language)
            except ClassNotFound as e:
                raise ConfigError(f'Unknown highlight language "{language}"') from e


@dataclass(frozen=True)
class I18nConfig:
    default_locale: str = 'en'
    locales: Sequence[str] = ('en',)

    def __post_init__(self) -> None:
        if self.default_locale not in self.locales:
            raise ConfigError(f'Default locale "{self.default_locale}" is not one of '
                              f'{list(self.locales)}')


@dataclass(frozen=True)
class SiteConfig(SupportsJSON):
    title: str
    url: str
    base_url: str = '/'
    tagline: str = ''
    favicon: Optional[str] = None
    organization_name: Optional[str] = None
    project_name: Optional[str] = None
    trailing_slash: Optional[bool] = None
    on_broken_links: BrokenLinksPolicy = 'throw'
    i18n: I18nConfig = field(default_factory=I18nConfig)
    docs_route_base_path: str = '/docs'
    custom_css: Optional[str] = None
    image: Optional[str] = None
    color_mode: ColorMode = field(default_factory=ColorMode)
    navbar: Navbar = field(default_factory=lambda: Navbar(title=''))
    footer: Footer = field(default_factory=Footer)
    highlight: HighlightConfig = field(default_factory=HighlightConfig)

    def __post_init__(self) -> None:
        if not self.title.strip():
            raise ConfigError('Site title must not be empty')
        parts = urlsplit(self.url)
        if parts.scheme not in ('http', 'https') or not parts.netloc:
            raise ConfigError(f'Site url must be an absolute http(s) URL: "{self.url}"')
        if parts.path.strip('/'):
            raise ConfigError(f'Site url must not contain a path, use base_url instead: '
                              f'"{self.url}"')
        object.__setattr__(self, 'url', self.url.rstrip('/'))
        if not self.base_url.startswith('/'):
            raise ConfigError(f'base_url must start with "/": "{self.base_url}"')
        object.__setattr__(self, 'base_url', urls.normalize_base_url(self.base_url))
        object.__setattr__(self, 'docs_route_base_path',
                           '/' + self.docs_route_base_path.strip('/'))
        if self.on_broken_links not in get_args(BrokenLinksPolicy):
            raise ConfigError(f'Unknown broken links policy "{self.on_broken_links}"')
        if self.trailing_slash not in (True, False, None):
            raise ConfigError('trailing_slash must be true, false or null')

    def to_json(self) -> JSONObject:
        return {
            'title': self.title,
            'tagline': self.tagline,
            'favicon': self.favicon,
            'url': self.url,
            'baseUrl': self.base_url,
            'organizationName': self.organization_name,
            'projectName': self.project_name,
            'trailingSlash': self.trailing_slash,
            'onBrokenLinks': self.on_broken_links,
            'i18n': {'defaultLocale': self.i18n.default_locale,
                     'locales': list(self.i18n.locales)},
            'docs': {'routeBasePath': self.docs_route_base_path},
            'customCss': self.custom_css,
            'themeConfig': {
                'image': self.image,
                'colorMode': {
                    'defaultMode': self.color_mode.default_mode,
                    'respectPrefersColorScheme': self.color_mode.respect_prefers_color_scheme,
                },
                'navbar': {
                    'title': self.navbar.title,
                    'logo': {'alt': self.navbar.logo.alt, 'src': self.navbar.logo.src}
                    if self.navbar.logo else None,
                    'items': [i.to_json() for i in self.navbar.items],
                },
                'footer': {
                    'style': self.footer.style,
                    'links': [{'title': g.title,
                               'items': [{'label': l.label,
                                          **resolve_kwargs(to=l.to, href=l.href)}
                                         for l in g.items]}
                              for g in self.footer.links],
                    'copyright': self.footer.copyright,
                },
                'prism': {
                    'theme': self.highlight.theme,
                    'darkTheme': self.highlight.dark_theme,
                    'additionalLanguages': list(self.highlight.additional_languages),
                },
            },
        }

    @classmethod
    def from_json(cls, json_obj: Dict[str, Any]) -> 'SiteConfig':
        theme_config: Dict[str, Any] = json_obj.get('themeConfig') or {}
        i18n = json_obj.get('i18n')
        color_mode = theme_config.get('colorMode')
        navbar = theme_config.get('navbar')
        footer = theme_config.get('footer')
        prism = theme_config.get('prism')
        logo = (navbar or {}).get('logo')
        try:
            return cls(
                json_obj['title'], json_obj['url'],
                trailing_slash=json_obj.get('trailingSlash'),
                **resolve_kwargs(
                    base_url=json_obj.get('baseUrl'),
                    tagline=json_obj.get('tagline'),
                    favicon=json_obj.get('favicon'),
                    organization_name=json_obj.get('organizationName'),
                    project_name=json_obj.get('projectName'),
                    on_broken_links=json_obj.get('onBrokenLinks'),
                    i18n=I18nConfig(**resolve_kwargs(
                        default_locale=i18n.get('defaultLocale'),
                        locales=tuple(i18n['locales']) if 'locales' in i18n else None
                    )) if i18n else None,
                    docs_route_base_path=(json_obj.get('docs') or {}).get('routeBasePath'),
                    custom_css=json_obj.get('customCss'),
                    image=theme_config.get('image'),
                    color_mode=ColorMode(**resolve_kwargs(
                        default_mode=color_mode.get('defaultMode'),
                        respect_prefers_color_scheme=color_mode.get(
                            'respectPrefersColorScheme')
                    )) if color_mode else None,
                    navbar=Navbar(
                        navbar.get('title', ''),
                        logo=NavbarLogo(logo.get('alt', ''), logo['src']) if logo else None,
                        items=tuple(NavbarItem.from_json(i) for i in navbar.get('items', []))
                    ) if navbar else None,
                    footer=Footer(**resolve_kwargs(
                        style=footer.get('style'),
                        links=tuple(FooterLinkGroup(g.get('title', ''),
                                                    tuple(FooterLink(i['label'],
                                                                     to=i.get('to'),
                                                                     href=i.get('href'))
                                                          for i in g.get('items', [])))
                                    for g in footer.get('links', [])),
                        copyright=footer.get('copyright')
                    )) if footer else None,
                    highlight=HighlightConfig(**resolve_kwargs(
                        theme=prism.get('theme'),
                        dark_theme=prism.get('darkTheme'),
                        additional_languages=tuple(prism['additionalLanguages'])
                        if 'additionalLanguages' in prism else None
                    )) if prism else None,
                ))
        except KeyError as e:
            raise ConfigError(f'Missing required configuration field {e}') from e


def load_config(path: PathLike) -> SiteConfig:
    '''
    Loads a site configuration from a JSON file.

    Parameters:
        path: Path to the JSON configuration.

    Returns:
        The validated site configuration.
    '''
    try:
        json_obj = read_json(path)
    except ValueError as e:
        raise ConfigError(str(e)) from e
    if not isinstance(json_obj, dict):
        raise ConfigError('Site configuration must be a JSON object')
    config = SiteConfig.from_json(json_obj)
    logger.info(f'Loaded site configuration "{config.title}" from "{path}"')
    return config


DEFAULT_CONFIG: Final[SiteConfig] = SiteConfig(
    title='Vue Component Library with GitLab',
    tagline='Learn to build, publish, and share Vue components internally using '
    'GitLab Package Registry',
    favicon='img/favicon.ico',
    url='https://shootingstar.github.io',
    base_url='/internal-lib-sharing-with-gitlab/',
    organization_name='shootingstar',
    project_name='internal-lib-sharing-with-gitlab',
    trailing_slash=False,
    on_broken_links='throw',
    i18n=I18nConfig(default_locale='en', locales=('en',)),
    docs_route_base_path='/',
    custom_css='css/custom.css',
    image='img/docusaurus-social-card.jpg',
    color_mode=ColorMode(default_mode='dark', respect_prefers_color_scheme=True),
    navbar=Navbar(
        title='Vue + GitLab Registry',
        logo=NavbarLogo(alt='Course Logo', src='img/logo.svg'),
        items=(
            NavbarItem('📚 Course', position='left', sidebar_id='courseSidebar'),
            NavbarItem('GitLab Docs', position='right',
                       href='https://docs.gitlab.com/ee/user/packages/npm_registry/'),
            NavbarItem('Vue.js', position='right', href='https://vuejs.org/'),
        ),
    ),
    footer=Footer(
        style='dark',
        links=(
            FooterLinkGroup('Course', (
                FooterLink('Getting Started', to='/'),
                FooterLink('Build Your Library', to='/building-library/project-setup'),
                FooterLink('Publish to GitLab', to='/publishing/gitlab-registry-setup'),
            )),
            FooterLinkGroup('Resources', (
                FooterLink('Vue.js Documentation',
                           href='https://vuejs.org/guide/introduction.html'),
                FooterLink('GitLab Package Registry',
                           href='https://docs.gitlab.com/ee/user/packages/'),
                FooterLink('Vite', href='https://vitejs.dev/'),
            )),
            FooterLinkGroup('Tools', (
                FooterLink('GitLab', href='https://gitlab.com'),
                FooterLink('npm', href='https://www.npmjs.com/'),
            )),
        ),
        copyright='Copyright © {year} Internal Training. Built with coursesite.',
    ),
    highlight=HighlightConfig(theme='default', dark_theme='dracula',
                              additional_languages=('bash', 'json', 'yaml')),
)
