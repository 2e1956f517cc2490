'''
Discovery and rendering of the markdown documents referenced by content identifiers.
'''

from dataclasses import dataclass, field
from html import unescape
import logging
import posixpath
from pathlib import Path
from typing import Any, Callable, Dict, Final, List, Optional, Tuple
from xml.etree.ElementTree import Element

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from coursesite.core import urls
from coursesite.core.utils import PathLike, humanize
from coursesite.exceptions import ContentError

logger = logging.getLogger('coursesite')

DOC_EXTENSION: Final[str] = '.md'
MARKDOWN_EXTENSIONS: Final[List[str]] = ['meta', 'tables', 'fenced_code', 'toc', 'attr_list',
                                         'codehilite']
MARKDOWN_EXTENSION_CONFIGS: Final[Dict[str, Dict[str, Any]]] = {
    'codehilite': {
        'css_class': 'highlight',
        'guess_lang': False,
    },
    'toc': {
        'permalink': False,
        'toc_depth': '2-3',
    },
}

LinkResolver = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class Document:
    doc_id: str
    path: Path
    source: str
    title: str
    sidebar_label: str
    has_heading: bool = False
    front_matter: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RenderedDocument:
    document: Document
    html: str
    toc: List[Dict[str, Any]] = field(default_factory=list)


def _outline(source: str) -> Tuple[Dict[str, str], Optional[str]]:
    md = markdown.Markdown(extensions=['meta', 'fenced_code', 'toc'])
    md.convert(source)
    meta: Dict[str, List[str]] = getattr(md, 'Meta', {})
    front_matter = {key: ' '.join(values).strip() for key, values in meta.items()}
    # Heading names come back HTML-escaped
    title = next((unescape(token['name']) for token in getattr(md, 'toc_tokens', [])
                  if token['level'] == 1), None)
    return front_matter, title


def read_front_matter(source: str) -> Dict[str, str]:
    '''
    Extracts the ``key: value`` front matter at the top of a markdown document.
    '''
    return _outline(source)[0]


def read_title(source: str) -> Optional[str]:
    '''
    Returns the text of the first level-1 heading of a markdown document. Lines inside
    fenced code blocks are not headings.
    '''
    return _outline(source)[1]


def doc_id_for(docs_dir: Path, path: Path) -> str:
    return path.relative_to(docs_dir).with_suffix('').as_posix()


def load_document(docs_dir: Path, path: Path) -> Document:
    try:
        source = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ContentError(f'Could not read "{path}": {e}') from e
    front_matter, heading = _outline(source)
    doc_id = doc_id_for(docs_dir, path)
    if 'id' in front_matter:
        # An explicit id replaces the file stem but keeps the directory
        doc_id = posixpath.join(posixpath.dirname(doc_id), front_matter['id'])
    title = front_matter.get('title') or heading or humanize(doc_id)
    return Document(doc_id, path, source, title,
                    sidebar_label=front_matter.get('sidebar_label', title),
                    has_heading=heading is not None,
                    front_matter=front_matter)


def discover_documents(docs_dir: PathLike) -> Dict[str, Document]:
    '''
    Collects every markdown document under a directory, keyed by content identifier.

    Parameters:
        docs_dir: Directory holding the markdown sources.

    Returns:
        The documents keyed by content identifier, in path order.

    Raises:
        ContentError: If the directory does not exist or two documents share an identifier.
    '''
    docs_dir = Path(docs_dir)
    if not docs_dir.is_dir():
        raise ContentError(f'Content directory "{docs_dir}" does not exist')
    documents: Dict[str, Document] = {}
    for path in sorted(docs_dir.rglob(f'*{DOC_EXTENSION}')):
        document = load_document(docs_dir, path)
        if document.doc_id in documents:
            raise ContentError(f'Duplicate content identifier "{document.doc_id}" in '
                               f'"{path}" and "{documents[document.doc_id].path}"')
        documents[document.doc_id] = document
    logger.info(f'Located {len(documents)} content documents in "{docs_dir}"')
    return documents


def resolve_doc_link(doc_id: str, href: str) -> Optional[str]:
    '''
    Resolves a relative ``*.md`` link written in a document to the content identifier it
    targets. Returns ``None`` for any other kind of link.
    '''
    if urls.is_external(href) or href.startswith('#'):
        return None
    path, _ = urls.split_suffix(href)
    if not path.endswith(DOC_EXTENSION):
        return None
    if path.startswith('/'):
        target = path.lstrip('/')
    else:
        target = posixpath.join(posixpath.dirname(doc_id), path)
    return posixpath.normpath(target)[:-len(DOC_EXTENSION)]


class _LinkProcessor(Treeprocessor):

    def __init__(self, md: markdown.Markdown, resolver: LinkResolver) -> None:
        super().__init__(md)
        self.resolver = resolver

    def run(self, root: Element) -> None:
        for anchor in root.iter('a'):
            link = self.resolver(anchor.get('href', ''))
            if link is not None:
                anchor.set('href', link)


class LinkExtension(Extension):
    '''
    Rewrites the ``href`` of every anchor through a resolver. A resolver returning ``None``
    leaves the link untouched.
    '''

    def __init__(self, resolver: LinkResolver, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.resolver = resolver

    def extendMarkdown(self, md: markdown.Markdown) -> None:
        # Runs after the inline processor has produced the anchors
        md.treeprocessors.register(_LinkProcessor(md, self.resolver), 'coursesite_links', 5)


def render_document(document: Document,
                    resolver: Optional[LinkResolver] = None) -> RenderedDocument:
    extensions: List[Any] = list(MARKDOWN_EXTENSIONS)
    if resolver:
        extensions.append(LinkExtension(resolver))
    md = markdown.Markdown(extensions=extensions,
                           extension_configs=MARKDOWN_EXTENSION_CONFIGS)
    html = md.convert(document.source)
    logger.debug(f'Rendered "{document.doc_id}"')
    return RenderedDocument(document, html, toc=list(getattr(md, 'toc_tokens', [])))
