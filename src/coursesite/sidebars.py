'''
Navigation taxonomy of the course.

A sidebar is an ordered sequence of items. An item is either a content identifier (a leaf)
or a `Category` grouping further items under a label.
'''

from collections import Counter
from dataclasses import dataclass
import logging
from typing import Any, Dict, Final, Generator, List, Mapping, Sequence, Union

from coursesite.core.utils import JSONValue, PathLike, read_json
from coursesite.exceptions import SidebarError

logger = logging.getLogger('coursesite')


@dataclass(frozen=True)
class Category:
    label: str
    items: Sequence['SidebarItem'] = ()
    collapsed: bool = True
    collapsible: bool = True

    def __post_init__(self) -> None:
        if not self.label:
            raise SidebarError('Sidebar categories must have a label')
        if not self.collapsible and self.collapsed:
            # A category that cannot be collapsed is always shown expanded
            object.__setattr__(self, 'collapsed', False)


SidebarItem = Union[str, Category]
Sidebar = Sequence[SidebarItem]
Sidebars = Mapping[str, Sidebar]


def iter_doc_ids(items: Sidebar) -> Generator[str, None, None]:
    '''
    Yields every content identifier of a sidebar, depth-first, in declared order.
    '''
    for item in items:
        if isinstance(item, Category):
            yield from iter_doc_ids(item.items)
        else:
            yield item


def iter_categories(items: Sidebar) -> Generator[Category, None, None]:
    for item in items:
        if isinstance(item, Category):
            yield item
            yield from iter_categories(item.items)


def contains_doc(item: SidebarItem, doc_id: str) -> bool:
    if isinstance(item, Category):
        return any(contains_doc(i, doc_id) for i in item.items)
    return item == doc_id


def item_from_json(json_obj: Any) -> SidebarItem:
    if isinstance(json_obj, str):
        return json_obj
    if isinstance(json_obj, dict):
        item_type = json_obj.get('type')
        if item_type == 'doc' and isinstance(json_obj.get('id'), str):
            return json_obj['id']
        if item_type == 'category':
            items = json_obj.get('items', [])
            if not isinstance(items, list):
                raise SidebarError(f'Items of category "{json_obj.get("label")}" must be a list')
            return Category(json_obj.get('label', ''),
                            tuple(item_from_json(i) for i in items),
                            collapsed=bool(json_obj.get('collapsed', True)),
                            collapsible=bool(json_obj.get('collapsible', True)))
    raise SidebarError(f'Unsupported sidebar item: {json_obj!r}')


def item_to_json(item: SidebarItem) -> JSONValue:
    if isinstance(item, Category):
        return {'type': 'category', 'label': item.label, 'collapsed': item.collapsed,
                'collapsible': item.collapsible,
                'items': [item_to_json(i) for i in item.items]}
    return item


def sidebar_from_json(json_obj: Any) -> Sidebar:
    if not isinstance(json_obj, list):
        raise SidebarError('A sidebar must be a list of items')
    sidebar = tuple(item_from_json(i) for i in json_obj)
    duplicates = [d for d, count in Counter(iter_doc_ids(sidebar)).items() if count > 1]
    if duplicates:
        logger.debug(f'Sidebar references {", ".join(duplicates)} more than once')
    return sidebar


def sidebar_to_json(sidebar: Sidebar) -> List[JSONValue]:
    return [item_to_json(i) for i in sidebar]


def sidebars_from_json(json_obj: Any) -> Dict[str, Sidebar]:
    if not isinstance(json_obj, dict):
        raise SidebarError('Sidebars must be a JSON object keyed by sidebar identifier')
    return {sidebar_id: sidebar_from_json(items) for sidebar_id, items in json_obj.items()}


def load_sidebars(path: PathLike) -> Dict[str, Sidebar]:
    '''
    Loads sidebars from a JSON file, e.g. ``{"courseSidebar": ["intro", ...]}``.

    Parameters:
        path: Path to the JSON file.

    Returns:
        The sidebars keyed by sidebar identifier.
    '''
    try:
        json_obj = read_json(path)
    except ValueError as e:
        raise SidebarError(str(e)) from e
    sidebars = sidebars_from_json(json_obj)
    logger.info(f'Loaded {len(sidebars)} sidebar(s) from "{path}"')
    return sidebars


COURSE_SIDEBARS: Final[Dict[str, Sidebar]] = {
    'courseSidebar': (
        'intro',
        Category('🏗️ Building Your Library', collapsed=False, items=(
            'building-library/project-setup',
            'building-library/creating-components',
            'building-library/styling-components',
            'building-library/building-for-distribution',
        )),
        Category('📦 Publishing to GitLab', collapsed=False, items=(
            'publishing/gitlab-registry-setup',
            'publishing/package-configuration',
            'publishing/publishing-workflow',
            'publishing/versioning-strategy',
        )),
        Category('🔧 Using the Library', collapsed=False, items=(
            'consuming/installing-packages',
            'consuming/authentication',
            'consuming/using-components',
        )),
        Category('🚀 Advanced Topics', collapsed=True, items=(
            'advanced/ci-cd-automation',
            'advanced/monorepo-setup',
            'advanced/documentation',
        )),
    ),
}
