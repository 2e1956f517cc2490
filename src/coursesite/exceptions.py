from typing import Any, Sequence


class CourseSiteError(Exception):
    pass


class ConfigError(CourseSiteError, ValueError):
    pass


class SidebarError(CourseSiteError, ValueError):
    pass


class ContentError(CourseSiteError):
    pass


class OutputDirectoryError(CourseSiteError):
    pass


class BrokenReferenceError(CourseSiteError):

    def __init__(self, references: Sequence[Any]) -> None:
        self.references = list(references)
        lines = '\n'.join(f'  - {r}' for r in self.references)
        super().__init__(f'Found {len(self.references)} broken reference(s):\n{lines}')
