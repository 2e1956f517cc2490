'''
The coursesite command line interface.
'''

from enum import Enum
from pathlib import Path
import logging
from dataclasses import replace


from click import BadParameter
from rich import print
from rich.tree import Tree
from typer import Argument, Exit, Option, Typer
from typing import Dict, Final, Optional

import coursesite
from coursesite import builder
from coursesite.builder import BuildConfig
from coursesite.config import DEFAULT_CONFIG, SiteConfig, load_config
from coursesite.exceptions import BrokenReferenceError, CourseSiteError
from coursesite.sidebars import COURSE_SIDEBARS, Category, Sidebar, Sidebars, load_sidebars

logger = logging.getLogger('coursesite')

app = Typer(no_args_is_help=True)

CONFIG_FILE: Final[str] = 'coursesite.json'
SIDEBARS_FILE: Final[str] = 'sidebars.json'

# Argument/option choices


class BrokenLinksPolicy(str, Enum):
    IGNORE = 'ignore'
    LOG = 'log'
    WARN = 'warn'
    THROW = 'throw'

# Argument/option validation callbacks


def validate_json_file(path: Optional[Path]) -> Optional[Path]:
    if path and path.suffix.casefold() != '.json':
        raise BadParameter(f'Expected a JSON file: "{path.name}"')
    return path

# Miscellaneous argument/option callbacks


def toggle_logging(enable: bool) -> None:
    if enable and logger.level in (logging.NOTSET, logging.WARNING):
        logger.setLevel(logging.INFO)


def toggle_debug_logging(enable: bool) -> None:
    if enable:
        logger.setLevel(logging.DEBUG)


def show_version(show: bool) -> None:
    if show:
        print(f'[b]coursesite {coursesite.__version__}')
        raise Exit()


# Arguments
SITE_DIR: Final[Path] = Argument(Path('.'), file_okay=False, exists=True,
                                 help='Directory holding the docs/ and static/ directories.')

# Options
CONFIG: Final[Optional[Path]] = Option(None, '--config', '-c', dir_okay=False, exists=True,
                                       callback=validate_json_file,
                                       help='Site configuration JSON file. Defaults to '
                                       f'{CONFIG_FILE} in the site directory, or the built-in '
                                       'course configuration.')
SIDEBARS: Final[Optional[Path]] = Option(None, '--sidebars', '-s', dir_okay=False, exists=True,
                                         callback=validate_json_file,
                                         help='Sidebars JSON file. Defaults to '
                                         f'{SIDEBARS_FILE} in the site directory, or the '
                                         'built-in course sidebar.')
ON_BROKEN_LINKS: Final[Optional[BrokenLinksPolicy]] = Option(None,
                                                             help='Overrides how broken '
                                                             'references are handled.')
OUT: Final[Optional[Path]] = Option(None, '--out', '-o', file_okay=False,
                                    help='Output directory. Defaults to build/ in the site '
                                    'directory.')
PROGRESS: Final[bool] = Option(True, '--progress / --no-progress',
                               help='Display a progress bar while rendering pages.')
DEBUG: Final[bool] = Option(False, '--debug', callback=toggle_debug_logging,
                            hidden=True)
VERBOSE: Final[bool] = Option(False, '--verbose', '-v',
                              callback=toggle_logging,
                              help='Display verbose logging information.')
VERSION: Final[bool] = Option(False, '--version', is_eager=True, callback=show_version,
                              help='Shows the installed version of coursesite and exit.')


def resolve_config(site_dir: Path, config: Optional[Path],
                   on_broken_links: Optional[BrokenLinksPolicy]) -> SiteConfig:
    if not config and (site_dir / CONFIG_FILE).is_file():
        config = site_dir / CONFIG_FILE
    site_config = load_config(config) if config else DEFAULT_CONFIG
    if on_broken_links:
        site_config = replace(site_config, on_broken_links=on_broken_links.value)
    return site_config


def resolve_sidebars(site_dir: Optional[Path], sidebars: Optional[Path]) -> Sidebars:
    if not sidebars and site_dir and (site_dir / SIDEBARS_FILE).is_file():
        sidebars = site_dir / SIDEBARS_FILE
    return load_sidebars(sidebars) if sidebars else COURSE_SIDEBARS


@app.callback()
def main(version: bool = VERSION) -> None:
    '''
    Builds the static course site.
    '''


@app.command()
def build(site_dir: Path = SITE_DIR, out: Optional[Path] = OUT,
          config: Optional[Path] = CONFIG, sidebars: Optional[Path] = SIDEBARS,
          on_broken_links: Optional[BrokenLinksPolicy] = ON_BROKEN_LINKS,
          progress: bool = PROGRESS, debug: bool = DEBUG, verbose: bool = VERBOSE) -> None:
    '''
    Builds the site into a directory of static files.
    '''
    try:
        site_config = resolve_config(site_dir, config, on_broken_links)
        result = builder.build(site_dir, out_dir=out, config=site_config,
                               sidebars=resolve_sidebars(site_dir, sidebars),
                               build_config=BuildConfig(show_progress=progress))
    except CourseSiteError as e:
        logger.error(str(e))
        raise Exit(code=1) from e
    print(f'[b green]Built {len(result.pages)} pages into {result.out_dir}')
    if result.broken_references:
        print(f'[b yellow]{len(result.broken_references)} broken reference(s) were ignored')


@app.command()
def check(site_dir: Path = SITE_DIR, config: Optional[Path] = CONFIG,
          sidebars: Optional[Path] = SIDEBARS, debug: bool = DEBUG,
          verbose: bool = VERBOSE) -> None:
    '''
    Checks every sidebar, navbar, footer and content reference without writing any file.
    '''
    try:
        site_config = replace(resolve_config(site_dir, config, None), on_broken_links='ignore')
        site = builder.prepare(site_dir, config=site_config,
                               sidebars=resolve_sidebars(site_dir, sidebars),
                               build_config=BuildConfig(show_progress=False))
    except CourseSiteError as e:
        logger.error(str(e))
        raise Exit(code=1) from e
    if site.broken_references:
        logger.error(str(BrokenReferenceError(site.broken_references)))
        raise Exit(code=1)
    print(f'[b green]All references of {len(site.documents)} documents resolve')


def sidebar_tree(label: str, items: Sidebar) -> Tree:
    tree = Tree(f'[b]{label}')

    def add(node: Tree, sidebar: Sidebar) -> None:
        for item in sidebar:
            if isinstance(item, Category):
                state = 'collapsed' if item.collapsed else 'expanded'
                add(node.add(f'{item.label} [dim]({state})'), item.items)
            else:
                node.add(item)

    add(tree, items)
    return tree


@app.command()
def sidebar(sidebars: Optional[Path] = SIDEBARS, debug: bool = DEBUG) -> None:
    '''
    Prints the navigation taxonomy.
    '''
    try:
        resolved: Dict[str, Sidebar] = dict(resolve_sidebars(None, sidebars))
    except CourseSiteError as e:
        logger.error(str(e))
        raise Exit(code=1) from e
    for sidebar_id, items in resolved.items():
        print(sidebar_tree(sidebar_id, items))
