from pathlib import Path

import pytest

from coursesite.core import content
from coursesite.exceptions import ContentError


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


def test_discover_documents(tmp_path: Path) -> None:
    write(tmp_path / 'intro.md', '# Welcome\n\nHello.')
    write(tmp_path / 'publishing' / 'versioning-strategy.md', 'No heading here.')
    write(tmp_path / 'notes.txt', 'ignored')
    documents = content.discover_documents(tmp_path)
    assert list(documents) == ['intro', 'publishing/versioning-strategy']
    assert documents['intro'].title == 'Welcome'
    assert documents['intro'].has_heading
    versioning = documents['publishing/versioning-strategy']
    assert versioning.title == 'Versioning Strategy'
    assert not versioning.has_heading


def test_front_matter(tmp_path: Path) -> None:
    write(tmp_path / 'guide' / 'setup.md',
          '---\nid: getting-started\ntitle: Start Here\nsidebar_label: Start\n---\n\nBody text.')
    documents = content.discover_documents(tmp_path)
    document = documents['guide/getting-started']
    assert document.title == 'Start Here'
    assert document.sidebar_label == 'Start'
    html = content.render_document(document).html
    assert 'Body text.' in html
    assert 'getting-started' not in html


def test_duplicate_identifiers(tmp_path: Path) -> None:
    write(tmp_path / 'a.md', '# A')
    write(tmp_path / 'b.md', '---\nid: a\n---\n\n# B')
    with pytest.raises(ContentError):
        content.discover_documents(tmp_path)


def test_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(ContentError):
        content.discover_documents(tmp_path / 'docs')


def test_resolve_doc_link() -> None:
    assert content.resolve_doc_link('intro', 'building-library/project-setup.md') == \
        'building-library/project-setup'
    assert content.resolve_doc_link('publishing/publishing-workflow',
                                    'versioning-strategy.md#tags') == \
        'publishing/versioning-strategy'
    assert content.resolve_doc_link('consuming/authentication', '../intro.md') == 'intro'
    assert content.resolve_doc_link('consuming/authentication', '/advanced/documentation.md') == \
        'advanced/documentation'
    assert content.resolve_doc_link('intro', 'https://vuejs.org/guide.md') is None
    assert content.resolve_doc_link('intro', '/building-library/project-setup') is None
    assert content.resolve_doc_link('intro', '#what-you-need') is None


def test_render_rewrites_links(tmp_path: Path) -> None:
    path = write(tmp_path / 'intro.md',
                 '# Intro\n\nSee [setup](setup.md) and [Vue](https://vuejs.org/).\n\n'
                 '## Requirements\n\n```bash\nnpm install\n```\n')
    document = content.load_document(tmp_path, path)
    rendered = content.render_document(
        document, resolver=lambda href: '/course/setup' if href == 'setup.md' else None)
    assert 'href="/course/setup"' in rendered.html
    assert 'href="https://vuejs.org/"' in rendered.html
    assert 'class="highlight"' in rendered.html
    assert [entry['name'] for entry in rendered.toc] == ['Requirements']


def test_title_ignores_code_blocks(tmp_path: Path) -> None:
    path = write(tmp_path / 'setup.md',
                 'Run this:\n\n```bash\n# install deps\nnpm install\n```\n')
    document = content.load_document(tmp_path, path)
    assert (document.title, document.has_heading) == ('Setup', False)


def test_title_of_escaped_heading(tmp_path: Path) -> None:
    path = write(tmp_path / 'events.md', 'Intro text.\n\n# Props & Events\n\nBody.\n')
    document = content.load_document(tmp_path, path)
    assert (document.title, document.has_heading) == ('Props & Events', True)
    assert content.read_title('## Only a section\n') is None
