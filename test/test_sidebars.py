import json
from pathlib import Path

import pytest

from coursesite.exceptions import SidebarError
from coursesite.sidebars import *


def test_course_sidebar_order() -> None:
    doc_ids = list(iter_doc_ids(COURSE_SIDEBARS['courseSidebar']))
    assert doc_ids[0] == 'intro'
    assert len(doc_ids) == 15
    assert doc_ids.index('building-library/project-setup') < \
        doc_ids.index('building-library/creating-components')
    labels = [c.label for c in iter_categories(COURSE_SIDEBARS['courseSidebar'])]
    assert labels == ['🏗️ Building Your Library', '📦 Publishing to GitLab',
                      '🔧 Using the Library', '🚀 Advanced Topics']


def test_collapsed_flags() -> None:
    categories = list(iter_categories(COURSE_SIDEBARS['courseSidebar']))
    assert [c.collapsed for c in categories] == [False, False, False, True]


def test_non_collapsible_category_is_expanded() -> None:
    assert not Category('Always open', ('intro',), collapsed=True, collapsible=False).collapsed


def test_nested_categories() -> None:
    sidebar = sidebar_from_json([
        'intro',
        {'type': 'category', 'label': 'Outer', 'items': [
            'a',
            {'type': 'category', 'label': 'Inner', 'collapsed': False, 'items': ['b']},
            {'type': 'doc', 'id': 'c'},
        ]},
    ])
    assert list(iter_doc_ids(sidebar)) == ['intro', 'a', 'b', 'c']
    outer, inner = iter_categories(sidebar)
    assert outer.collapsed and not inner.collapsed
    assert contains_doc(outer, 'b')
    assert not contains_doc(inner, 'a')


@pytest.mark.parametrize('json_obj', [
    [42],
    [{'type': 'link', 'href': 'https://vuejs.org/'}],
    [{'type': 'category', 'items': ['a']}],
    [{'type': 'category', 'label': 'Bad', 'items': 'a'}],
    {'type': 'category'},
])
def test_invalid_sidebar(json_obj) -> None:
    with pytest.raises(SidebarError):
        sidebar_from_json(json_obj)


def test_json_form_of_course_sidebar() -> None:
    json_obj = sidebar_to_json(COURSE_SIDEBARS['courseSidebar'])
    assert json_obj[1]['label'] == '🏗️ Building Your Library'
    assert json_obj[1]['items'][0] == 'building-library/project-setup'
    assert sidebar_from_json(json_obj) == COURSE_SIDEBARS['courseSidebar']


def test_load_sidebars(tmp_path: Path) -> None:
    path = tmp_path / 'sidebars.json'
    path.write_text(json.dumps({'guide': ['intro', {'type': 'category', 'label': 'More',
                                                    'items': ['faq']}]}))
    sidebars = load_sidebars(path)
    assert list(sidebars) == ['guide']
    assert list(iter_doc_ids(sidebars['guide'])) == ['intro', 'faq']
    path.write_text('["intro"]')
    with pytest.raises(SidebarError):
        load_sidebars(path)
