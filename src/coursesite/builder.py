'''
Builds the static course site: resolves every reference, renders every page and writes the
output tree.
'''

from contextlib import nullcontext
from dataclasses import dataclass, field
import logging
import shutil
from pathlib import Path, PurePosixPath
from typing import Dict, Final, List, Mapping, Optional, Sequence

from coursesite.config import DEFAULT_CONFIG, SiteConfig
from coursesite.core import content, render, urls
from coursesite.core.content import Document, RenderedDocument
from coursesite.core.dashboard import Progress
from coursesite.core.utils import PathLike
from coursesite.exceptions import BrokenReferenceError, OutputDirectoryError
from coursesite.pages import home
from coursesite.sidebars import COURSE_SIDEBARS, Sidebars, iter_doc_ids

logger = logging.getLogger('coursesite')

DOCS_DIR: Final[str] = 'docs'
STATIC_DIR: Final[str] = 'static'
OUTPUT_DIR: Final[str] = 'build'
HOME_ROUTE: Final[str] = '/'


@dataclass(frozen=True)
class BrokenReference:
    source: str
    target: str

    def __str__(self) -> str:
        return f'{self.source} references missing "{self.target}"'


@dataclass(frozen=True)
class BuildConfig:
    show_progress: bool = True
    clean: bool = True


@dataclass
class Site:
    site_dir: Path
    config: SiteConfig
    sidebars: Sidebars
    documents: Dict[str, Document] = field(default_factory=dict)
    routes: Dict[str, Optional[str]] = field(default_factory=dict)
    pages: Dict[PurePosixPath, str] = field(default_factory=dict)
    broken_references: List[BrokenReference] = field(default_factory=list)


@dataclass(frozen=True)
class BuildResult:
    out_dir: Path
    pages: List[Path]
    broken_references: List[BrokenReference]


def normalize_route(link: str) -> str:
    path, _ = urls.split_suffix(link)
    return '/' + path.strip('/')


def collect_routes(config: SiteConfig, documents: Mapping[str, Document]) -> Dict[str, Optional[str]]:
    '''
    Maps every site-relative route of the site to the content identifier it serves.
    The landing page maps to ``None``.
    '''
    routes: Dict[str, Optional[str]] = {HOME_ROUTE: None}
    for doc_id in documents:
        routes[normalize_route(urls.route_for_doc(config, doc_id))] = doc_id
    return routes


def check_static_references(config: SiteConfig, sidebars: Sidebars,
                            documents: Mapping[str, Document],
                            actions: Sequence[home.HeroAction] = home.HERO_ACTIONS
                            ) -> List[BrokenReference]:
    '''
    Checks the references held by the sidebars, the navbar, the footer and the landing page.

    Parameters:
        config: Site configuration.
        sidebars: Sidebars keyed by sidebar identifier.
        documents: Discovered documents keyed by content identifier.
        actions: Hero banner links of the landing page.

    Returns:
        Every reference that does not resolve, in discovery order.
    '''
    broken: List[BrokenReference] = []
    for sidebar_id, sidebar in sidebars.items():
        for doc_id in iter_doc_ids(sidebar):
            if doc_id not in documents:
                broken.append(BrokenReference(f'Sidebar "{sidebar_id}"', doc_id))
    routes = collect_routes(config, documents)
    internal_links = [(f'Navbar item "{i.label}"', i.to) for i in config.navbar.items if i.to]
    internal_links.extend((f'Footer link "{l.label}"', l.to)
                          for g in config.footer.links for l in g.items if l.to)
    internal_links.extend((f'Landing page action "{a.label}"', a.to) for a in actions)
    for source, link in internal_links:
        if normalize_route(link) not in routes:
            broken.append(BrokenReference(source, link))
    for item in config.navbar.items:
        if item.sidebar_id and item.sidebar_id not in sidebars:
            broken.append(BrokenReference(f'Navbar item "{item.label}"',
                                          f'sidebar {item.sidebar_id}'))
    return broken


def handle_broken_references(config: SiteConfig, broken: Sequence[BrokenReference]) -> None:
    if not broken:
        return
    if config.on_broken_links == 'throw':
        raise BrokenReferenceError(broken)
    for reference in broken:
        if config.on_broken_links == 'warn':
            logger.warning(str(reference))
        elif config.on_broken_links == 'log':
            logger.info(str(reference))


def _sidebar_of(sidebars: Sidebars, doc_id: str) -> Optional[str]:
    return next((sidebar_id for sidebar_id, sidebar in sidebars.items()
                 if doc_id in iter_doc_ids(sidebar)), None)


def _pager_link(config: SiteConfig, documents: Mapping[str, Document],
                doc_id: Optional[str]) -> Optional[render.LinkView]:
    if doc_id is None or doc_id not in documents:
        return None
    return render.LinkView(documents[doc_id].sidebar_label,
                           urls.url_for(config, urls.route_for_doc(config, doc_id)))


def _resolve_route(site: Site, document: Document, href: str) -> Optional[str]:
    path, suffix = urls.split_suffix(href)
    if urls.is_external(href) or not path.startswith('/'):
        return None
    path = urls.strip_base_url(site.config, path)
    if normalize_route(path) in site.routes:
        return urls.url_for(site.config, href)
    if (site.site_dir / STATIC_DIR / path.lstrip('/')).is_file():
        return urls.asset_url(site.config, path) + suffix
    site.broken_references.append(BrokenReference(f'Document "{document.doc_id}"', href))
    return None


def _render_document(site: Site, document: Document) -> RenderedDocument:

    def resolve(href: str) -> Optional[str]:
        target = content.resolve_doc_link(document.doc_id, href)
        if target is None:
            return _resolve_route(site, document, href)
        if target not in site.documents:
            site.broken_references.append(BrokenReference(f'Document "{document.doc_id}"',
                                                          href))
            return None
        _, suffix = urls.split_suffix(href)
        return urls.url_for(site.config, urls.route_for_doc(site.config, target)) + suffix

    return content.render_document(document, resolver=resolve)


def prepare(site_dir: PathLike, config: SiteConfig = DEFAULT_CONFIG,
            sidebars: Sidebars = COURSE_SIDEBARS,
            build_config: BuildConfig = BuildConfig()) -> Site:
    '''
    Discovers the content of a site, checks every reference and renders every page in memory.

    Parameters:
        site_dir: Directory holding the ``docs/`` and ``static/`` directories.
        config: Site configuration.
        sidebars: Sidebars keyed by sidebar identifier.
        build_config: Build options.

    Returns:
        The rendered site.

    Raises:
        BrokenReferenceError: If a reference does not resolve and the site's broken links
            policy is ``throw``.
    '''
    site = Site(Path(site_dir), config, sidebars)
    site.documents = content.discover_documents(site.site_dir / DOCS_DIR)
    site.routes = collect_routes(config, site.documents)
    site.broken_references.extend(check_static_references(config, sidebars, site.documents))
    env = render.create_environment(config)
    ctx = Progress('Rendering pages...', total=len(site.documents) + 1) \
        if build_config.show_progress else nullcontext()
    with ctx as progress:
        for doc_id, document in site.documents.items():
            known_broken = len(site.broken_references)
            rendered = _render_document(site, document)
            sidebar_id = _sidebar_of(sidebars, doc_id)
            previous_doc = next_doc = None
            if sidebar_id:
                order = list(dict.fromkeys(iter_doc_ids(sidebars[sidebar_id])))
                index = order.index(doc_id)
                previous_doc = order[index - 1] if index > 0 else None
                next_doc = order[index + 1] if index + 1 < len(order) else None
            route = urls.route_for_doc(config, doc_id)
            site.pages[urls.output_path_for(route, config.trailing_slash)] = \
                render.render_doc_page(env, config, sidebars, document, rendered.html, route,
                                       sidebar_id=sidebar_id, documents=site.documents,
                                       toc=rendered.toc,
                                       previous_link=_pager_link(config, site.documents,
                                                                 previous_doc),
                                       next_link=_pager_link(config, site.documents,
                                                             next_doc))
            if progress is not None:
                progress.advance()
                if len(site.broken_references) > known_broken:
                    progress.advance(errors=True,
                                     advance=len(site.broken_references) - known_broken)
        site.pages[urls.output_path_for(HOME_ROUTE, config.trailing_slash)] = \
            home.render_home(env, config, sidebars)
        if progress is not None:
            progress.advance()
    logger.info(f'Rendered {len(site.pages)} pages')
    handle_broken_references(config, site.broken_references)
    return site


def check_out_dir(site_dir: PathLike, out_dir: PathLike) -> None:
    '''
    Rejects an output directory whose removal would delete the site's sources: the site
    directory itself, one of its parents, or a path inside ``docs/`` or ``static/``.
    '''
    site_dir = Path(site_dir).resolve()
    out_dir = Path(out_dir).resolve()
    if out_dir == site_dir or out_dir in site_dir.parents:
        raise OutputDirectoryError(f'Output directory "{out_dir}" contains the site sources')
    for source_dir in (site_dir / DOCS_DIR, site_dir / STATIC_DIR):
        if out_dir == source_dir or source_dir in out_dir.parents:
            raise OutputDirectoryError(f'Output directory "{out_dir}" is inside the site '
                                       f'sources "{source_dir}"')


def write_assets(site: Site, out_dir: Path) -> None:
    static_dir = site.site_dir / STATIC_DIR
    if static_dir.is_dir():
        shutil.copytree(static_dir, out_dir, dirs_exist_ok=True)
        logger.debug(f'Copied static files from "{static_dir}"')
    stylesheet = render.render_highlight_css(site.config.highlight)
    if site.config.custom_css:
        custom_css = site.site_dir / site.config.custom_css
        if custom_css.is_file():
            stylesheet += '\n' + custom_css.read_text(encoding='utf-8')
        else:
            logger.warning(f'Custom stylesheet "{custom_css}" does not exist')
    stylesheet_path = out_dir / render.STYLESHEET
    stylesheet_path.parent.mkdir(parents=True, exist_ok=True)
    stylesheet_path.write_text(stylesheet, encoding='utf-8')


def build(site_dir: PathLike, out_dir: Optional[PathLike] = None,
          config: SiteConfig = DEFAULT_CONFIG, sidebars: Sidebars = COURSE_SIDEBARS,
          build_config: BuildConfig = BuildConfig()) -> BuildResult:
    '''
    Builds the site into a directory of static files.

    Parameters:
        site_dir: Directory holding the ``docs/`` and ``static/`` directories.
        out_dir: Output directory. Defaults to ``build/`` inside the site directory.
        config: Site configuration.
        sidebars: Sidebars keyed by sidebar identifier.
        build_config: Build options.

    Returns:
        The written pages and any broken references the policy let through.

    Raises:
        OutputDirectoryError: If the output directory holds the site's sources.
    '''
    out_dir = Path(out_dir) if out_dir else Path(site_dir) / OUTPUT_DIR
    check_out_dir(site_dir, out_dir)
    site = prepare(site_dir, config=config, sidebars=sidebars, build_config=build_config)
    if build_config.clean and out_dir.exists():
        logger.debug(f'Removing previous build at "{out_dir}"')
        shutil.rmtree(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    write_assets(site, out_dir)
    written: List[Path] = []
    for relative_path, html in site.pages.items():
        path = out_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding='utf-8')
        written.append(path)
    logger.info(f'Wrote {len(written)} pages to "{out_dir}"')
    return BuildResult(out_dir, written, list(site.broken_references))
