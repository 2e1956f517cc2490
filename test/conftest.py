from pathlib import Path

import pytest

from coursesite.builder import BuildConfig
from coursesite.sidebars import COURSE_SIDEBARS, iter_doc_ids
from coursesite.core.utils import humanize

COURSE_DIR = Path(__file__).parent.parent / "course"


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """
    Provides a site directory holding one markdown document per course sidebar entry.
    """
    site = tmp_path / "site"
    docs = site / "docs"
    for doc_id in iter_doc_ids(COURSE_SIDEBARS["courseSidebar"]):
        path = docs / f"{doc_id}.md"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"# {humanize(doc_id)}\n\nContent of {doc_id}.\n")
    (site / "static" / "img").mkdir(parents=True)
    (site / "static" / "img" / "logo.svg").write_text("<svg></svg>")
    return site


@pytest.fixture
def quiet() -> BuildConfig:
    """
    Provides a build configuration without a progress bar.
    """
    return BuildConfig(show_progress=False)


@pytest.fixture
def course_dir() -> Path:
    """
    Provides the course shipped with the repository.
    """
    return COURSE_DIR
