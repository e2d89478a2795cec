from __future__ import annotations
import logging
from typing import (
    Any, Callable, Iterable, Iterator, List, Optional, Tuple, TypeVar,
)
import warnings

from .linked import LinkedList, _empty
from .protocol import (
    A, Collectable, Collector, Enumerable, Instruction, ProtocolError, Reducer, Result,
    collector_for, reduce_steps,
)


T = TypeVar('T')
U = TypeVar('U')

_logger = logging.getLogger(__name__)


# exceptions

class IndexOutOfRangeError(IndexError):
    pass


# balancing

def _rebalance(run: LinkedList[T]) -> Tuple[LinkedList[T], LinkedList[T]]:
    ''' return (kept, moved): the newer half of `run` stays put, the older
    half is reversed so it can serve as the opposite run
    '''
    _logger.debug('rebalancing run of %d elements', len(run))
    kept, rest = run.split(len(run) // 2)
    return LinkedList.from_iterable(kept), rest.reverse()


def _balance(front: LinkedList[T], back: LinkedList[T]) -> Tuple[LinkedList[T], LinkedList[T]]:
    # with two or more elements neither run may be empty
    if not front and len(back) > 1:
        back, front = _rebalance(back)
    elif not back and len(front) > 1:
        front, back = _rebalance(front)
    return front, back


class Queue(Enumerable[T], Collectable[T]):
    ''' Persistent double-ended queue.

    Elements live in two runs: `front` holds the head of the queue in order,
    `back` holds the tail of the queue in reverse order, so the logical
    content is `front ++ reverse(back)`. Every operation returns a new queue.

    A queue advertises the Enumerable and Collectable capabilities unless
    built with `enumerable=False` / `collectable=False`; queues derived from
    it keep the same settings.
    '''
    __slots__ = ('_front', '_back', '_length', '_enumerable', '_collectable')

    def __init__(self, items: Optional[Iterable[Any]] = None, mapper: Optional[Callable[[Any], T]] = None,
                 *, enumerable: bool = True, collectable: bool = True):
        if items is None:
            values: List[T] = []
        elif mapper is None:
            values = list(items)
        else:
            values = [mapper(x) for x in items]
        self._enumerable: bool = enumerable
        self._collectable: bool = collectable
        self._set_runs(LinkedList.from_iterable(values), _empty)


    @classmethod
    def new(cls, items: Optional[Iterable[Any]] = None, mapper: Optional[Callable[[Any], T]] = None,
            *, enumerable: bool = True, collectable: bool = True) -> Queue[T]:
        return cls(items, mapper, enumerable=enumerable, collectable=collectable)


    @classmethod
    def from_list(cls, items: Iterable[T], *, enumerable: bool = True, collectable: bool = True) -> Queue[T]:
        return cls(items, enumerable=enumerable, collectable=collectable)


    @classmethod
    def from_runs(cls, front: Iterable[T], back: Iterable[T],
                  *, enumerable: bool = True, collectable: bool = True) -> Queue[T]:
        ''' build from the two runs directly; `back` is given last element first
        '''
        q = cls(enumerable=enumerable, collectable=collectable)
        q._set_runs(LinkedList.from_iterable(front), LinkedList.from_iterable(back))
        return q


    def _set_runs(self, front: LinkedList[T], back: LinkedList[T]):
        self._front, self._back = _balance(front, back)
        self._length: int = len(front) + len(back)


    def _derive(self, front: LinkedList[U], back: LinkedList[U]) -> Queue[U]:
        q = type(self).__new__(type(self))
        q._enumerable = self._enumerable
        q._collectable = self._collectable
        q._set_runs(front, back)
        return q


    @property
    def runs(self) -> Tuple[Tuple[T, ...], Tuple[T, ...]]:
        return tuple(self._front), tuple(self._back)


    # ends

    def insert_front(self, item: T) -> Queue[T]:
        return self._derive(self._front.cons(item), self._back)


    insert = insert_front


    def insert_back(self, item: T) -> Queue[T]:
        return self._derive(self._front, self._back.cons(item))


    def pop_front(self, default: Optional[T] = None) -> Tuple[Optional[T], Queue[T]]:
        if self._front:
            return self._front.head, self._derive(self._front.tail, self._back)
        if self._back:
            # balanced, so the back run holds the only element
            return self._back.head, self._derive(_empty, _empty)
        return default, self


    def pop_back(self, default: Optional[T] = None) -> Tuple[Optional[T], Queue[T]]:
        if self._back:
            return self._back.head, self._derive(self._front, self._back.tail)
        if self._front:
            return self._front.head, self._derive(_empty, _empty)
        return default, self


    def remove_front(self) -> Queue[T]:
        _, rest = self.pop_front()
        return rest


    def remove_back(self) -> Queue[T]:
        _, rest = self.pop_back()
        return rest


    def first(self) -> Optional[T]:
        if self._front:
            return self._front.head
        if self._back:
            return self._back.head
        return None


    def last(self) -> Optional[T]:
        if self._back:
            return self._back.head
        if self._front:
            return self._front.head
        return None


    def extend(self, items: Iterable[T]) -> Queue[T]:
        return self._derive(self._front, self._back.prepend_all(items))


    def extend_front(self, items: Iterable[T]) -> Queue[T]:
        return self._derive(self._front.prepend_all(items), self._back)


    # whole queue

    def length(self) -> int:
        return self._length


    def is_empty(self) -> bool:
        return not self._front and not self._back


    def to_list(self) -> List[T]:
        return list(self._iter())


    def reverse(self) -> Queue[T]:
        return self._derive(self._back, self._front)


    def join(self, other: Queue[T]) -> Queue[T]:
        if other.is_empty():
            return self
        if self.is_empty():
            return self._derive(other._front, other._back)
        # everything of self goes in front of other's front run, other's back run is shared
        front = other._front.prepend_all(reversed(self.to_list()))
        return self._derive(front, other._back)


    def split_at(self, n: int) -> Tuple[Queue[T], Queue[T]]:
        if n < 0 or n > self._length:
            raise IndexOutOfRangeError(f'split index {n} out of range for queue of length {self._length}')
        if n == 0:
            return self._derive(_empty, _empty), self
        if n == self._length:
            return self, self._derive(_empty, _empty)

        if n <= len(self._front):
            taken, rest = self._front.split(n)
            return self._derive(LinkedList.from_iterable(taken), _empty), self._derive(rest, self._back)

        taken, rest = self._back.split(self._length - n)
        return self._derive(self._front, rest), self._derive(_empty, LinkedList.from_iterable(taken))


    def member(self, item: Any) -> bool:
        return item in self._front or item in self._back


    # traversal

    def all(self, pred: Callable[[T], Any]) -> bool:
        return all(pred(x) for x in self._iter())


    def any(self, pred: Callable[[T], Any]) -> bool:
        return any(pred(x) for x in self._iter())


    def fold(self, init: A, fun: Callable[[T, A], A]) -> A:
        acc = init
        for x in self._iter():
            acc = fun(x, acc)
        return acc


    def fold_back(self, init: A, fun: Callable[[T, A], A]) -> A:
        acc = init
        for x in self._iter_back():
            acc = fun(x, acc)
        return acc


    def filter(self, pred: Callable[[T], Any]) -> Queue[T]:
        return self._rebuild(x for x in self._iter() if pred(x))


    def reject(self, pred: Callable[[T], Any]) -> Queue[T]:
        return self._rebuild(x for x in self._iter() if not pred(x))


    def filter_map(self, fun: Callable[[T], Optional[U]]) -> Queue[U]:
        ''' keep fun(x) for every element where it is not None
        '''
        def gen():
            for x in self._iter():
                y = fun(x)
                if y is not None:
                    yield y
        return self._rebuild(gen())


    def filter_splice(self, fun: Callable[[T], Any]) -> Queue[Any]:
        ''' True keeps the element, False drops it, a list replaces it by its
        items. Deprecated, use filter, reject or filter_map.
        '''
        warnings.warn('filter_splice is deprecated, use filter, reject or filter_map',
                      DeprecationWarning, stacklevel=2)

        def gen():
            for x in self._iter():
                r = fun(x)
                if r is True:
                    yield x
                elif r is False:
                    continue
                elif isinstance(r, list):
                    yield from r
                else:
                    raise TypeError(f'filter_splice function must return a bool or a list, got {r!r}')
        return self._rebuild(gen())


    def delete(self, item: Any) -> Queue[T]:
        ''' remove the first element equal to `item`, if any
        '''
        return self.delete_with(lambda x: x == item)


    def delete_back(self, item: Any) -> Queue[T]:
        ''' remove the last element equal to `item`, if any
        '''
        return self.reverse().delete(item).reverse()


    def delete_with(self, pred: Callable[[T], Any]) -> Queue[T]:
        items = self.to_list()
        for i, x in enumerate(items):
            if pred(x):
                del items[i]
                return self._rebuild(items)
        return self


    def _rebuild(self, items: Iterable[U]) -> Queue[U]:
        return self._derive(LinkedList.from_iterable(items), _empty)


    def _iter(self) -> Iterator[T]:
        yield from self._front
        yield from self._back.reverse()


    def _iter_back(self) -> Iterator[T]:
        yield from self._back
        yield from self._front.reverse()


    # Enumerable

    def is_enumerable(self) -> bool:
        return self._enumerable


    def _check_enumerable(self):
        if not self._enumerable:
            raise ProtocolError('Queue does not implement Enumerable')


    def count(self) -> int:
        self._check_enumerable()
        return self._length


    def contains(self, value: Any) -> bool:
        self._check_enumerable()
        return self.member(value)


    def slice(self) -> Optional[Callable[[int, int], List[T]]]:
        self._check_enumerable()
        return None


    def reduce(self, instruction: Instruction[A], fun: Reducer[A]) -> Result[A]:
        self._check_enumerable()
        return reduce_steps(_step_front, self, instruction, fun)


    # Collectable

    def is_collectable(self) -> bool:
        return self._collectable


    def into(self) -> Tuple[Any, Collector]:
        if not self._collectable:
            raise ProtocolError('Queue does not implement Collectable')
        return self, collector_for(lambda acc, elem: acc.insert_back(elem))


    # python data model

    def __iter__(self) -> Iterator[T]:
        self._check_enumerable()
        return self._iter()


    def __reversed__(self) -> Iterator[T]:
        self._check_enumerable()
        return self._iter_back()


    def __len__(self):
        return self._length


    def __bool__(self):
        return not self.is_empty()


    def __contains__(self, item: Any) -> bool:
        return self.member(item)


    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Queue):
            return NotImplemented
        if self._length != other._length:
            return False
        return all(x == y for x, y in zip(self._iter(), other._iter()))


    def __hash__(self):
        return hash(tuple(self._iter()))


    def __repr__(self):
        return f'Queue({self.to_list()!r})'


def _step_front(q: Queue[T]) -> Optional[Tuple[T, Queue[T]]]:
    if q.is_empty():
        return None
    return q.pop_front()


def is_queue(value: Any) -> bool:
    return isinstance(value, Queue)
