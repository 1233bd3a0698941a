"""Ordered from -> to remap rules.

Rules are kept in insertion order; order decides match precedence downstream.
Sources are compared by their canonical JSON text, so `{"key_code": "a"}`
matches regardless of key order or whitespace in the original document.
"""

from __future__ import annotations

import copy
from typing import Any, Iterator, Optional

from .errors import NotAnArrayError, NotAnObjectError, WrongFieldTypeError
from .json_helpers import canonical, is_array, is_object


class SimpleModifications:
    def __init__(self) -> None:
        self._pairs: list[tuple[Any, Any]] = []

    @property
    def pairs(self) -> list[tuple[Any, Any]]:
        return list(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return iter(list(self._pairs))

    def update(self, json_value: Any) -> None:
        """Merge rules from a JSON array.

        An entry whose `from` already exists overwrites that rule's `to` in
        place; other entries are appended. Entries missing either side are
        skipped.
        """

        if not is_array(json_value):
            raise NotAnArrayError(json_value)

        for entry in json_value:
            if not is_object(entry):
                raise NotAnObjectError(entry)

            if "from" not in entry or "to" not in entry:
                continue

            from_value = entry["from"]
            to_value = entry["to"]
            if not is_object(from_value):
                raise WrongFieldTypeError("from", "object", from_value)
            if not (is_object(to_value) or is_array(to_value)):
                raise WrongFieldTypeError("to", "object or array", to_value)

            self.replace_second(from_value, to_value)

    def to_json(self) -> list:
        return [{"from": copy.deepcopy(f), "to": copy.deepcopy(t)} for f, t in self._pairs]

    def _index_of(self, from_value: Any) -> Optional[int]:
        key = canonical(from_value)
        for i, (f, _t) in enumerate(self._pairs):
            if canonical(f) == key:
                return i
        return None

    def find_to(self, from_value: Any) -> Any | None:
        i = self._index_of(from_value)
        if i is None:
            return None
        return copy.deepcopy(self._pairs[i][1])

    def push_back_pair(self, from_value: Any, to_value: Any) -> None:
        self._pairs.append((copy.deepcopy(from_value), copy.deepcopy(to_value)))

    def erase_pair(self, index: int) -> None:
        if 0 <= index < len(self._pairs):
            del self._pairs[index]

    def replace_pair(self, index: int, from_value: Any, to_value: Any) -> None:
        if 0 <= index < len(self._pairs):
            self._pairs[index] = (copy.deepcopy(from_value), copy.deepcopy(to_value))

    def replace_second(self, from_value: Any, to_value: Any) -> None:
        """Set the target for `from_value`, appending a new rule if needed."""

        i = self._index_of(from_value)
        if i is None:
            self.push_back_pair(from_value, to_value)
        else:
            self._pairs[i] = (self._pairs[i][0], copy.deepcopy(to_value))
