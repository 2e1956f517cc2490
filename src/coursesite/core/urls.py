'''
Link generation under the site's base URL.

Every link the site emits goes through `url_for`, so the base URL and the
trailing-slash policy are applied in exactly one place.
'''

import re
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from coursesite.config import SiteConfig

_SLASHES = re.compile(r'/{2,}')
_EXTERNAL = re.compile(r'^(?:[a-zA-Z][a-zA-Z0-9+.-]*:|//)')


def is_external(link: str) -> bool:
    return bool(_EXTERNAL.match(link))


def normalize_base_url(base_url: str) -> str:
    '''
    Ensures a base URL starts and ends with exactly one slash.

    Parameters:
        base_url: Base URL pathname, e.g. ``/my-project``.

    Returns:
        The normalized base URL, e.g. ``/my-project/``.
    '''
    return _SLASHES.sub('/', f'/{base_url.strip("/")}/')


def split_suffix(link: str) -> Tuple[str, str]:
    '''
    Splits a link into its path and its ``?query``/``#fragment`` suffix.
    '''
    match = re.search(r'[?#]', link)
    if not match:
        return link, ''
    return link[:match.start()], link[match.start():]


def apply_trailing_slash(path: str, trailing_slash: Optional[bool]) -> str:
    if trailing_slash is None or path.endswith('/') and trailing_slash:
        return path
    if trailing_slash:
        return f'{path}/'
    # The site root always keeps its slash
    stripped = path.rstrip('/')
    return stripped if stripped else '/'


def join_url(base_url: str, path: str, trailing_slash: Optional[bool] = None) -> str:
    path, suffix = split_suffix(path)
    path = path.strip('/')
    base_url = normalize_base_url(base_url)
    if not path:
        return base_url + suffix
    return apply_trailing_slash(_SLASHES.sub('/', base_url + path), trailing_slash) + suffix


def url_for(config: 'SiteConfig', path: str) -> str:
    '''
    Maps a site-relative route (``/intro``) to the public link under the site's base URL.

    External links are returned unchanged. Links that already carry the base URL are not
    prefixed twice.

    Parameters:
        config: Site configuration providing the base URL and trailing-slash policy.
        path: Site-relative route or external URL.

    Returns:
        The link to emit in generated markup.
    '''
    if is_external(path) or path.startswith('#'):
        return path
    return join_url(config.base_url, strip_base_url(config, path), config.trailing_slash)


def strip_base_url(config: 'SiteConfig', path: str) -> str:
    '''
    Removes the base URL from a link that already carries it, e.g. ``/course/intro`` becomes
    ``/intro`` under the base URL ``/course/``.
    '''
    if config.base_url != '/' and path.startswith(config.base_url):
        return '/' + path[len(config.base_url):]
    return path


def asset_url(config: 'SiteConfig', path: str) -> str:
    '''
    Links a static file under the base URL. Files never take a trailing slash.
    '''
    if is_external(path):
        return path
    return join_url(config.base_url, path)


def absolute_url(config: 'SiteConfig', path: str) -> str:
    return config.url + url_for(config, path)


def route_for_doc(config: 'SiteConfig', doc_id: str) -> str:
    '''
    Returns the site-relative route of a content document, e.g. ``/building-library/setup``.
    '''
    return str(PurePosixPath(config.docs_route_base_path) / doc_id)


def output_path_for(route: str, trailing_slash: Optional[bool]) -> PurePosixPath:
    '''
    Returns the file, relative to the output directory, that serves a site-relative route.
    '''
    route = route.strip('/')
    if not route:
        return PurePosixPath('index.html')
    if trailing_slash is False:
        return PurePosixPath(f'{route}.html')
    return PurePosixPath(route) / 'index.html'

