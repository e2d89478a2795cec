from __future__ import annotations
from abc import abstractmethod
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple, TypeVar

from . import protocol
from .protocol import (
    A, Collectable, Collector, Enumerable, Instruction, Reducer, Result,
    collector_for, reduce_steps,
)
from .queue import Queue


T = TypeVar('T')


def _wrap(seed: Optional[Iterable[T]]) -> Queue[T]:
    if seed is None:
        return Queue()
    if isinstance(seed, Queue):
        return seed
    return Queue(seed)


class _QueueView(Enumerable[T], Collectable[T]):
    __slots__ = ('_inner',)

    def __init__(self, seed: Optional[Iterable[T]] = None):
        self._inner: Queue[T] = _wrap(seed)

    @property
    def inner(self) -> Queue[T]:
        return self._inner

    @abstractmethod
    def _step(self, q: Queue[T]) -> Optional[Tuple[T, Queue[T]]]:
        pass

    @abstractmethod
    def _put(self, q: Queue[T], elem: T) -> Queue[T]:
        pass

    # Enumerable

    def count(self) -> int:
        return len(self._inner)

    def contains(self, value: Any) -> bool:
        return self._inner.member(value)

    def slice(self) -> Optional[Callable[[int, int], List[T]]]:
        return None

    def reduce(self, instruction: Instruction[A], fun: Reducer[A]) -> Result[A]:
        return reduce_steps(self._step, self._inner, instruction, fun)

    # Collectable

    def into(self) -> Tuple[Any, Collector]:
        cls = type(self)

        def put(acc: _QueueView[T], elem: T) -> _QueueView[T]:
            return cls(self._put(acc.inner, elem))

        return self, collector_for(put)

    # python data model

    def __iter__(self) -> Iterator[T]:
        return protocol.iterate(self)

    def __len__(self):
        return len(self._inner)

    def __contains__(self, value: Any) -> bool:
        return self._inner.member(value)

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner == other._inner

    def __hash__(self):
        return hash((type(self).__name__, self._inner))

    def __repr__(self):
        return f'{type(self).__name__}({self._inner.to_list()!r})'


class Collection(_QueueView[T]):
    ''' Queue view that enumerates front to back and collects at the back.

    >>> protocol.to_list(Collection([1, 2, 3, 4]))
    [1, 2, 3, 4]
    >>> protocol.into(range(1, 5), Collection([0])).inner.to_list()
    [0, 1, 2, 3, 4]
    '''
    __slots__ = ()

    def _step(self, q: Queue[T]) -> Optional[Tuple[T, Queue[T]]]:
        if q.is_empty():
            return None
        return q.pop_front()

    def _put(self, q: Queue[T], elem: T) -> Queue[T]:
        return q.insert_back(elem)


class ReverseCollection(_QueueView[T]):
    ''' Queue view that enumerates back to front and collects at the front.

    >>> protocol.to_list(ReverseCollection([1, 2, 3, 4]))
    [4, 3, 2, 1]
    >>> protocol.into(range(1, 5), ReverseCollection([0])).inner.to_list()
    [4, 3, 2, 1, 0]
    '''
    __slots__ = ()

    def _step(self, q: Queue[T]) -> Optional[Tuple[T, Queue[T]]]:
        if q.is_empty():
            return None
        return q.pop_back()

    def _put(self, q: Queue[T], elem: T) -> Queue[T]:
        return q.insert_front(elem)
