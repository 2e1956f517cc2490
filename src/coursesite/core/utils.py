import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Type, TypeVar, Union

logger = logging.getLogger('coursesite')

PathLike = Union[Path, str]
JSONValue = Optional[Union[str, int, float,
                           bool, List['JSONValue'], 'JSONObject']]
JSONObject = Dict[str, JSONValue]

JSONObject_T = TypeVar('JSONObject_T', bound=JSONObject)  # type: ignore
SupportsJSON_T = TypeVar('SupportsJSON_T',
                         bound='SupportsJSON')  # type: ignore


class SupportsJSON(Protocol):

    def to_json(self) -> JSONObject_T:  # type: ignore
        ...

    @classmethod
    def from_json(cls: Type[SupportsJSON_T], json_obj: JSONObject_T) -> SupportsJSON_T:  # type: ignore
        ...


def resolve_kwargs(**kwargs: Any) -> Dict[str, Any]:
    return {k: v for k, v in kwargs.items() if v is not None}


def read_json(path: PathLike) -> Any:
    '''
    Reads a JSON document from disk.

    Parameters:
        path: Path to the JSON file.

    Returns:
        The decoded JSON value.

    Raises:
        ValueError: If the file does not contain valid JSON.
    '''
    path = Path(path)
    logger.debug(f'Reading "{path}"')
    try:
        return json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ValueError(f'Could not decode "{path.name}": {e}') from e


def humanize(identifier: str) -> str:
    '''
    Turns a content identifier into a readable title, e.g.
    ``building-library/ci-cd-automation`` becomes ``Ci Cd Automation``.
    '''
    stem = identifier.rstrip('/').rsplit('/', 1)[-1]
    words = stem.replace('_', ' ').replace('-', ' ').split()
    return ' '.join(w[:1].upper() + w[1:] for w in words)
