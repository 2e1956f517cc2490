import logging
from typing import Iterable, Optional, Union

from rich.console import Console
from rich.progress import Progress as BaseProgress
from rich.progress import BarColumn, GetTimeCallable, MofNCompleteColumn, ProgressColumn, \
    TextColumn, TimeElapsedColumn

from coursesite.core import utils

logger = logging.getLogger('coursesite')


class Progress(BaseProgress):

    def __init__(self, task: str,
                 columns: Iterable[Union[str, ProgressColumn]] = [TextColumn('{task.description}'),
                                                                  BarColumn(),
                                                                  MofNCompleteColumn(),
                                                                  TextColumn(
                                                                      '[b gray]Time Elapsed:'),
                                                                  TimeElapsedColumn(),
                                                                  TextColumn('[b yellow]Broken references: '
                                                                             '{task.fields[errors]}')],
                 total: Optional[float] = None, console: Optional[Console] = None,
                 auto_refresh: bool = True, refresh_per_second: float = 10,
                 transient: bool = False, get_time: Optional[GetTimeCallable] = None,
                 disable: bool = False, expand: bool = False) -> None:
        super().__init__(*columns, console=console, auto_refresh=auto_refresh,
                         refresh_per_second=refresh_per_second, transient=transient,
                         get_time=get_time, disable=disable, expand=expand)
        self._task = self.add_task(task, total=total, errors=0)

    @property
    def completed(self) -> float:
        return self.tasks[self._task].completed

    @property
    def total(self) -> Optional[float]:
        return self.tasks[self._task].total

    @property
    def errors(self) -> int:
        return self.tasks[self._task].fields['errors']

    def advance(self, errors: bool = False, advance: float = 1) -> None:
        if not errors:
            super().advance(self._task, advance)
        else:
            self.update(errors=self.errors + int(advance))

    def update(self, *, total: Optional[float] = None, completed: Optional[float] = None,
               advance: Optional[float] = None, description: Optional[str] = None,
               visible: Optional[bool] = None, refresh: bool = False, errors: Optional[int] = None) -> None:
        super().update(self._task, total=total, completed=completed, advance=advance,
                       description=description, visible=visible, refresh=refresh,
                       **utils.resolve_kwargs(errors=errors))
