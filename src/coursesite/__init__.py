"""
coursesite builds the static website of the "Vue Component Library with GitLab" course
"""

import logging

from rich.logging import RichHandler

# Configure logger
logging.basicConfig(
    level=logging.WARNING, format="%(message)s", datefmt="[%X]", handlers=[RichHandler()]
)
logger = logging.getLogger("coursesite")


from coursesite.builder import BuildConfig, BuildResult, build, prepare
from coursesite.config import DEFAULT_CONFIG, SiteConfig, load_config
from coursesite.sidebars import COURSE_SIDEBARS, Category, load_sidebars

__version__ = "1.0.0"
__all__ = [
    "build",
    "prepare",
    "BuildConfig",
    "BuildResult",
    "SiteConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "Category",
    "COURSE_SIDEBARS",
    "load_sidebars",
]
